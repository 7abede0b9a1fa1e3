from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import current_session, require_screen
from ..core.enums import Screen
from ..core.exceptions import InvalidFormat, ValidationError
from ..container import Container
from ..tokens.qr import decode_qr_image
from .model import RecordResult

logger = logging.getLogger(__name__)


def _result_json(result: RecordResult) -> dict:
    r = result.record
    return {
        "success": True,
        "action": result.action.value,
        "message": result.message,
        "record": {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else None,
            "delay_minutes": r.delay_minutes,
            "total_work_hours": round(r.total_work_hours, 4),
        },
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_scan")
    @require_screen(Screen.SCAN.value)
    def api_scan():
        """Check in or out with a scanned payload; the recorder picks the action."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        payload = data.get("payload") or data.get("qr_code") or ""
        if not isinstance(payload, str):
            raise InvalidFormat("QR payload must be text")
        payload = payload.strip()
        if not payload:
            raise InvalidFormat("QR payload must not be empty")

        device_id = data.get("device_id") or request.headers.get("X-Device-Id")
        if device_id is not None and not isinstance(device_id, str):
            raise ValidationError("device_id must be a string")

        result = container.scan_service.scan(current_session().identity, payload, device_id=device_id)
        return jsonify(_result_json(result))

    @app.route("/api/attendance/scan/image", methods=["POST"], endpoint="api_scan_image")
    @require_screen(Screen.SCAN.value)
    def api_scan_image():
        if "image" not in request.files:
            return jsonify({"success": False, "code": "invalid_format", "message": "No image uploaded"}), 400

        try:
            codes = decode_qr_image(request.files["image"].stream)
        except OSError:
            logger.info("uploaded scan image could not be read")
            raise InvalidFormat("The uploaded file is not a readable image")
        if not codes:
            raise InvalidFormat("No QR code found in the image")

        result = container.scan_service.scan(
            current_session().identity,
            codes[0],
            device_id=request.form.get("device_id") or request.headers.get("X-Device-Id"),
        )
        return jsonify(_result_json(result))

    @app.route("/api/attendance/history", endpoint="api_history")
    @require_screen(Screen.DASHBOARD.value)
    def api_history():
        limit = request.args.get("limit", type=int)
        kwargs = {"limit": limit} if limit and limit > 0 else {}
        identity = current_session().identity
        rows = container.attendance_service.get_history_ui(identity, **kwargs)
        today = container.attendance_service.get_today_record(identity, container.clock().date())
        return jsonify(
            {
                "success": True,
                "history": rows,
                "today": {"checked_in": today is not None, "open": bool(today and today.is_open)},
            }
        )

    @app.route("/api/attendance/log", endpoint="api_attendance_log")
    @require_screen(Screen.ATTENDANCE.value)
    def api_attendance_log():
        page = request.args.get("page", default=1, type=int)
        data = container.attendance_service.get_log_ui(page=page)
        return jsonify({"success": True, **data})
