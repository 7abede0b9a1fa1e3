from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_session, require_screen
from ..core.enums import Screen
from ..core.exceptions import ValidationError
from ..container import Container
from .service import parse_status


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", endpoint="api_payroll")
    @require_screen(Screen.PAYROLL.value)
    def api_payroll():
        now = container.clock()
        try:
            year = int(request.args.get("year") or now.year)
            month = int(request.args.get("month") or now.month)
        except ValueError:
            raise ValidationError("year and month must be numbers")

        report = container.payroll_service.monthly_report(
            current_session(),
            year=year,
            month=month,
            status=parse_status(request.args.get("status")),
        )
        return jsonify(
            {
                "success": True,
                "year": report.year,
                "month": report.month,
                "rows": report.rows,
                "totals": report.totals,
            }
        )
