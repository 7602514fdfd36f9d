from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/leave-requests", endpoint="list_leave_requests")
    @login_required
    def list_leave_requests():
        leaves = container.leave_service.list_requests(personnel_id=request.args.get("personnelId"))
        return jsonify([r.to_json() for r in leaves])

    @app.post("/api/leave-requests", endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        leave = container.leave_service.create_request(request.get_json(silent=True))
        return jsonify(leave.to_json()), 201

    @app.put("/api/leave-requests/<request_id>", endpoint="update_leave_request")
    @login_required
    def update_leave_request(request_id: str):
        leave = container.leave_service.update_status(
            request_id, request.get_json(silent=True), user=current_user()
        )
        return jsonify(leave.to_json())
