from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_session, login_required, require_screen
from ..core.enums import Screen
from ..container import Container
from .model import GlobalAttendanceSettings


def _settings_json(s: GlobalAttendanceSettings) -> dict:
    return {
        "check_in_time": s.check_in_time.strftime("%H:%M"),
        "check_out_time": s.check_out_time.strftime("%H:%M"),
        "grace_period_minutes": s.grace_period_minutes,
        "token_rotation_seconds": s.token_rotation_seconds,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="get_settings")
    @login_required
    def get_settings():
        current = container.settings_service.current()
        return jsonify({"success": True, "settings": _settings_json(current) if current else None})

    @app.route("/api/settings", methods=["PUT"], endpoint="update_settings")
    @require_screen(Screen.SETTINGS.value)
    def update_settings():
        data = request.get_json(silent=True) or {}
        updated = container.settings_service.update(
            current_session(),
            check_in_time=data.get("check_in_time"),
            check_out_time=data.get("check_out_time"),
            grace_period_minutes=data.get("grace_period_minutes"),
            token_rotation_seconds=data.get("token_rotation_seconds"),
        )
        return jsonify({"success": True, "settings": _settings_json(updated)})
