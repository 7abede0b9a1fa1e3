from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_session, login_required
from ..core.constants import DEFAULT_REPORT_DAYS
from ..container import Container

CSV_FIELDS = [
    "work_date",
    "employee_id",
    "full_name",
    "login_id",
    "check_in",
    "check_out",
    "delay_minutes",
    "worked_hours",
]


def register(app: Flask, container: Container) -> None:
    def _report_args():
        today = container.clock().date()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return parse_iso_date(start_s), parse_iso_date(end_s), request.args.get("employee_id") or None

    @app.route("/api/attendance/report", endpoint="api_report")
    @login_required
    def api_report():
        start, end, employee_id = _report_args()
        data = container.report_service.build_attendance_report(
            current_session(), start=start, end=end, employee_id=employee_id
        )
        return jsonify(
            {
                "success": True,
                "start": start.strftime("%Y-%m-%d"),
                "end": end.strftime("%Y-%m-%d"),
                "rows": data.rows,
                "summary": data.summary,
            }
        )

    @app.route("/api/attendance/report.csv", endpoint="api_report_csv")
    @login_required
    def api_report_csv():
        start, end, employee_id = _report_args()
        data = container.report_service.build_attendance_report(
            current_session(), start=start, end=end, employee_id=employee_id
        )

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
