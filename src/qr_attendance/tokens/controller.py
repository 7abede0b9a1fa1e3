from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, require_screen
from ..core.enums import Screen
from ..container import Container
from .model import IssuedToken
from .qr import render_qr_png


def register(app: Flask, container: Container) -> None:
    def _token_json(issued: IssuedToken) -> dict:
        return {
            "token_id": issued.token_id,
            "payload": issued.payload,
            "valid_until": issued.valid_until.isoformat(),
            "rotation_seconds": issued.rotation_seconds,
            "seconds_remaining": container.token_rotator.seconds_remaining(),
        }

    @app.route("/api/qr/current", endpoint="qr_current")
    @require_screen(Screen.ATTENDANCE_QR.value)
    def qr_current():
        """Payload the office display renders, plus its countdown."""
        issued = container.token_rotator.ensure_current()
        return jsonify({"success": True, "token": _token_json(issued)})

    @app.route("/api/qr/image", endpoint="qr_image")
    @require_screen(Screen.ATTENDANCE_QR.value)
    def qr_image():
        issued = container.token_rotator.ensure_current()
        return app.response_class(
            render_qr_png(issued.payload),
            mimetype="image/png",
            headers={"Cache-Control": "no-store"},
        )

    @app.route("/api/settings/purge-tokens", methods=["POST"], endpoint="purge_tokens")
    @require_screen(Screen.SETTINGS.value)
    def purge_tokens():
        deleted = container.token_maintenance.purge_stale(current_session())
        return jsonify({"success": True, "deleted": deleted})
