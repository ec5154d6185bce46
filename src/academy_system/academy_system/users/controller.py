from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.http import domain_error, error, login_required, success
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("Login error")
            return error("Internal server error during login", 500)

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        return success(
            {"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value},
            message="Login successful",
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return success(message="Logged out")

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return success({"id": session["user_id"], "name": session.get("name"), "role": session.get("role")})
