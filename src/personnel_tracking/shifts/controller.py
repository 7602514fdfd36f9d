from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, login_required
from ..common.serialization import to_json, to_json_list
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/shifts", endpoint="list_shifts")
    @login_required
    def list_shifts():
        shifts = container.shift_service.list_shifts(user=current_user(), branch_id=request.args.get("branchId"))
        return jsonify(to_json_list(shifts))

    @app.post("/api/shifts", endpoint="create_shift")
    @login_required
    def create_shift():
        shift = container.shift_service.create_shift(request.get_json(silent=True), user=current_user())
        return jsonify(to_json(shift)), 201
