from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.auth import make_token_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.auth_service)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_body()
        user_id = container.auth_service.register(
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
        )
        app.logger.info("Registered user %s", user_id)
        return jsonify({"message": "User created successfully", "userId": user_id}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_body()
        result = container.auth_service.login(email=data.get("email"), password=data.get("password"))
        return jsonify({"message": "Login successful", "token": result.token, "user": result.user.public_dict()})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @token_required
    def auth_me():
        user = container.auth_service.get_profile(g.user_id)
        return jsonify(user.public_dict())
