from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/api/stats", endpoint="stats")
    @login_required
    def stats():
        return jsonify(container.stats_service.dashboard().to_json())
