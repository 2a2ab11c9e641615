from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.auth import current_user_id, login_required
from ..common.responses import error_response, unexpected_error_response
from ..core.exceptions import DomainError
from ..container import Container


def _user_json(s_user) -> dict:
    return {
        "id": s_user.user_id,
        "fullName": s_user.full_name,
        "role": s_user.role.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Login failed")

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify({"success": True, "user": _user_json(s_user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            s_user = container.auth_service.get_profile(current_user_id())
        except DomainError as e:
            return error_response(e)
        return jsonify(_user_json(s_user))
