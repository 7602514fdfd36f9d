from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..auth.guards import current_user, login_required
from ..common.serialization import to_json, to_json_list
from ..container import Container
from .qr import render_qr_png


def register(app: Flask, container: Container) -> None:
    @app.get("/api/personnel", endpoint="list_personnel")
    @login_required
    def list_personnel():
        people = container.personnel_service.list_personnel(
            user=current_user(),
            search=request.args.get("search"),
            branch_id=request.args.get("branchId"),
        )
        return jsonify(to_json_list(people))

    @app.get("/api/personnel/<personnel_id>", endpoint="get_personnel")
    @login_required
    def get_personnel(personnel_id: str):
        person = container.personnel_service.get_personnel(personnel_id, user=current_user())
        return jsonify(to_json(person))

    @app.post("/api/personnel", endpoint="create_personnel")
    @login_required
    def create_personnel():
        person = container.personnel_service.create_personnel(request.get_json(silent=True), user=current_user())
        return jsonify(to_json(person)), 201

    @app.put("/api/personnel/<personnel_id>", endpoint="update_personnel")
    @login_required
    def update_personnel(personnel_id: str):
        person = container.personnel_service.update_personnel(
            personnel_id, request.get_json(silent=True), user=current_user()
        )
        return jsonify(to_json(person))

    @app.get("/api/personnel/<personnel_id>/qr", endpoint="personnel_qr")
    @login_required
    def personnel_qr(personnel_id: str):
        """QR badge for the scan station; the payload is the personnel id."""
        person = container.personnel_service.get_personnel(personnel_id, user=current_user())
        return send_file(
            render_qr_png(person.id),
            mimetype="image/png",
            download_name=f"personel-{person.employee_number}.png",
        )
