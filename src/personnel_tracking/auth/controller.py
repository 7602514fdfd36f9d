from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .guards import current_user, end_session, establish_session, login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.post("/api/register", endpoint="register")
    def register_user():
        data = json_body()
        acting_user = current_user()

        user = container.auth_service.register(
            phone=data.get("phone"),
            password=data.get("password"),
            name=data.get("name"),
            role=data.get("role"),
            branch_id=data.get("branchId"),
            acting_user=acting_user,
        )

        # An admin creating accounts keeps their own session.
        if acting_user is None:
            establish_session(user)

        return jsonify(user.public_json()), 201

    @app.post("/api/login", endpoint="login")
    def login():
        data = json_body()
        challenge = container.auth_service.begin_login(data.get("phone"), data.get("password"))
        return jsonify(challenge.to_json())

    @app.post("/api/verify-2fa", endpoint="verify_two_factor")
    def verify_two_factor():
        data = json_body()
        user = container.auth_service.verify_two_factor(data.get("userId"), data.get("code"))
        establish_session(user)
        return jsonify(user.public_json())

    @app.post("/api/logout", endpoint="logout")
    def logout():
        user = current_user()
        end_session()
        if user is not None:
            logger.info("User logged out (id=%s)", user.id)
        return jsonify({"message": "Çıkış yapıldı"})

    @app.get("/api/user", endpoint="current_user")
    @login_required
    def get_current_user():
        return jsonify(current_user().public_json())
