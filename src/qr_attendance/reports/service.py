from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import format_hours
from ..core.enums import Screen
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.session import SessionContext, can_view


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    """Attendance log + per-employee totals. Display only, no pay rules."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_attendance_report(
        self,
        session: SessionContext,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        # Employees without report access only ever see their own rows.
        if not can_view(session, Screen.REPORTS.value):
            if employee_id not in (None, session.identity):
                raise AuthorizationError("You can only view your own attendance")
            employee_id = session.identity

        query_rows = self._attendance.get_report_rows(start_date=start, end_date=end, employee_id=employee_id)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            closed = r.check_out_time is not None
            out_rows.append(
                {
                    "employee_id": r.employee_id,
                    "full_name": r.full_name,
                    "login_id": r.login_id,
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "check_in": r.check_in_time.strftime("%H:%M"),
                    "check_out": r.check_out_time.strftime("%H:%M") if closed else "-",
                    "delay_minutes": r.delay_minutes,
                    "worked_hours": format_hours(r.total_work_hours) if closed else "-",
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "full_name": r.full_name,
                    "login_id": r.login_id,
                    "days": 0,
                    "open_days": 0,
                    "late_days": 0,
                    "total_delay_minutes": 0,
                    "total_work_hours": 0.0,
                }
                summary_map[r.employee_id] = s
            s["days"] += 1
            s["open_days"] += 0 if closed else 1
            s["late_days"] += 1 if r.delay_minutes > 0 else 0
            s["total_delay_minutes"] += r.delay_minutes
            if closed:
                s["total_work_hours"] += r.total_work_hours

        summary = []
        for s in summary_map.values():
            summary.append({**s, "total_hours": format_hours(s["total_work_hours"])})

        summary.sort(key=lambda x: x["total_work_hours"], reverse=True)
        return ReportData(rows=out_rows, summary=summary)
