from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import admin_required, login_required
from ..common.serialization import to_json, to_json_list
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/branches", endpoint="list_branches")
    @login_required
    def list_branches():
        return jsonify(to_json_list(container.branch_service.list_branches()))

    @app.post("/api/branches", endpoint="create_branch")
    @admin_required
    def create_branch():
        branch = container.branch_service.create_branch(request.get_json(silent=True))
        return jsonify(to_json(branch)), 201

    @app.put("/api/branches/<branch_id>", endpoint="update_branch")
    @admin_required
    def update_branch(branch_id: str):
        branch = container.branch_service.update_branch(branch_id, request.get_json(silent=True))
        return jsonify(to_json(branch))
