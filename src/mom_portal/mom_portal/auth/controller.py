from __future__ import annotations

from flask import Flask, g

from ..common.http import json_body, ok
from ..common.ratelimit import rate_limited
from ..container import Container
from .guards import current_identity


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    limit = rate_limited(container.auth_rate_limiter)

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    @limit
    @guards.optional_auth
    def auth_register():
        result = container.auth_service.register(json_body(), caller=g.get("identity"))
        return ok(result.to_dict(), message="User registered successfully", status=201)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @limit
    def auth_login():
        body = json_body()
        result = container.auth_service.login(
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return ok(result.to_dict(), message="Login successful")

    @app.route("/api/auth/verify", methods=["GET"], endpoint="auth_verify")
    @guards.login_required
    def auth_verify():
        return ok(current_identity().to_dict(), message="Token is valid")

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    @guards.login_required
    def auth_profile():
        user = container.auth_service.get_profile(current_identity().user_id)
        return ok(user.to_dict())

    @app.route("/api/auth/profile", methods=["PUT"], endpoint="auth_update_profile")
    @guards.login_required
    def auth_update_profile():
        user = container.auth_service.update_profile(current_identity().user_id, json_body())
        return ok(user.to_dict(), message="Profile updated successfully")

    @app.route("/api/auth/change-password", methods=["PUT"], endpoint="auth_change_password")
    @guards.login_required
    def auth_change_password():
        body = json_body()
        container.auth_service.change_password(
            current_identity().user_id,
            current_password=body.get("currentPassword"),
            new_password=body.get("newPassword"),
        )
        return ok(message="Password changed successfully")
