from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, super_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/settings", endpoint="get_settings")
    @super_admin_required
    def get_settings():
        return jsonify(container.settings_service.get_settings())

    @app.put("/api/settings", endpoint="update_settings")
    @super_admin_required
    def update_settings():
        document = container.settings_service.update_settings(
            request.get_json(silent=True), updated_by=current_user().id
        )
        return jsonify(document)
