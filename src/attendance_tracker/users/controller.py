from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import (
    SESSION_KEY,
    current_user,
    int_arg,
    json_body,
    json_error,
    login_required,
    permission_required,
)
from ..core.enums import Permission, Role
from ..core.exceptions import ValidationError
from ..container import Container


def _role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session[SESSION_KEY] = s_user.to_session()
        return jsonify({"success": True, "user": s_user.to_session()})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        user = current_user()
        return jsonify(
            {
                **user.to_session(),
                "views": [v.value for v in container.view_router.available_views(user)],
            }
        )

    @app.route("/api/me/password", methods=["PUT"], endpoint="change_password")
    @permission_required(Permission.CHANGE_PASSWORD)
    def change_password():
        data = json_body()
        container.user_service.change_password(
            user_id=current_user().user_id,
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
        )
        return jsonify({"success": True, "message": "Password changed"})

    @app.route("/api/views/<view>", endpoint="open_view")
    @login_required
    def open_view(view: str):
        params = {}
        if "year" in request.args:
            params["year"] = int_arg("year", 0)
        if "month" in request.args:
            params["month"] = int_arg("month", 0)
        data = container.view_router.dispatch(view, current_user(), **params)
        return jsonify({"view": view, "data": data})

    @app.route("/api/users", endpoint="list_users")
    @permission_required(Permission.VIEW_USER_MANAGEMENT)
    def list_users():
        return jsonify([u.to_public_dict() for u in container.user_service.list_users()])

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @permission_required(Permission.MANAGE_USERS)
    def add_user():
        data = json_body()
        user_id = container.user_service.create_account(
            full_name=data.get("full_name", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=_role(data.get("role", Role.VIEWER.value)),
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/users/<int:user_id>/role", methods=["PUT"], endpoint="assign_role")
    @permission_required(Permission.ASSIGN_ROLES)
    def assign_role(user_id: int):
        container.user_service.assign_role(
            acting_user_id=current_user().user_id,
            user_id=user_id,
            role=_role(json_body().get("role")),
        )
        return jsonify({"success": True, "message": "Role updated"})

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @permission_required(Permission.MANAGE_USERS)
    def delete_user(user_id: int):
        if user_id <= 0:
            return json_error("Invalid user id", 400)
        container.user_service.delete_user(acting_user_id=current_user().user_id, user_id=user_id)
        return jsonify({"success": True, "message": "User deleted"})
