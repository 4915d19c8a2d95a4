from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, permission_required
from ..core.enums import Permission
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    def _ok(settings):
        return jsonify({"success": True, "settings": settings.to_values()})

    @app.route("/api/settings", endpoint="get_settings")
    @permission_required(Permission.VIEW_SETTINGS)
    def get_settings():
        return jsonify(service.get_settings().to_values())

    @app.route("/api/settings/weekends", methods=["PUT"], endpoint="update_weekends")
    @permission_required(Permission.EDIT_WEEKEND_SETTINGS)
    def update_weekends():
        return _ok(service.update_weekends(json_body().get("weekends") or []))

    @app.route("/api/settings/holidays", methods=["POST"], endpoint="add_holiday")
    @permission_required(Permission.EDIT_HOLIDAY_SETTINGS)
    def add_holiday():
        data = json_body()
        return _ok(service.add_holiday(data.get("date", ""), data.get("name", "")))

    @app.route("/api/settings/holidays/<day>", methods=["DELETE"], endpoint="delete_holiday")
    @permission_required(Permission.EDIT_HOLIDAY_SETTINGS)
    def delete_holiday(day: str):
        return _ok(service.delete_holiday(day))

    @app.route("/api/settings/shifts", methods=["PUT"], endpoint="update_shifts")
    @permission_required(Permission.EDIT_SHIFT_SETTINGS)
    def update_shifts():
        return _ok(service.update_shifts(json_body().get("shifts") or {}))

    @app.route("/api/settings/shifts/<name>", methods=["PUT"], endpoint="save_shift")
    @permission_required(Permission.EDIT_SHIFT_SETTINGS)
    def save_shift(name: str):
        data = json_body()
        return _ok(service.save_shift(name, data.get("start", ""), data.get("end", "")))

    @app.route("/api/settings/shifts/<name>", methods=["DELETE"], endpoint="delete_shift")
    @permission_required(Permission.EDIT_SHIFT_SETTINGS)
    def delete_shift(name: str):
        return _ok(service.delete_shift(name))
