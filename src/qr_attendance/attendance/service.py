from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LOG_PAGE_SIZE
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository


def format_hours(hours: float) -> str:
    minutes = int(round(max(hours, 0.0) * 60))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def get_history_ui(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(employee_id, limit)
        return [self._to_ui(r) for r in rows]

    def get_today_record(self, employee_id: str, today: date) -> Optional[AttendanceRecord]:
        """Get today's attendance record for an employee"""
        return self._attendance.get_for_employee_and_date(employee_id, today)

    def get_log_ui(self, *, page: int = 1, page_size: int = DEFAULT_LOG_PAGE_SIZE) -> dict:
        """One page of every employee's records, newest check-in first."""
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        # one extra row tells whether a next page exists
        rows = list(self._attendance.get_log_page(limit=page_size + 1, offset=(page - 1) * page_size))
        return {
            "page": page,
            "page_size": page_size,
            "has_next": len(rows) > page_size,
            "rows": [self._log_row(r) for r in rows[:page_size]],
        }

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "check_out": r.check_out_time.strftime("%H:%M:%S") if r.check_out_time else "-",
            "delay_minutes": r.delay_minutes,
            "worked_hours": format_hours(r.total_work_hours) if r.check_out_time else "-",
            "status": "late" if r.delay_minutes > 0 else "on-time",
            "open": r.is_open,
        }

    def _log_row(self, r: AttendanceReportRow) -> dict:
        closed = r.check_out_time is not None
        return {
            "employee_id": r.employee_id,
            "full_name": r.full_name,
            "login_id": r.login_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in_time.strftime("%H:%M:%S"),
            "check_out": r.check_out_time.strftime("%H:%M:%S") if closed else "-",
            "delay_minutes": r.delay_minutes,
            "worked_hours": format_hours(r.total_work_hours) if closed else "-",
            "status": "late" if r.delay_minutes > 0 else "on-time",
            "open": not closed,
        }
