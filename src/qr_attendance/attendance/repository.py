from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in_time: datetime,
        delay_minutes: int,
    ) -> Optional[int]:
        """Create today's open record.

        Returns the new record id, or ``None`` if a record for the same
        employee and date already exists (nothing is overwritten).
        """

        raise NotImplementedError

    def close_checkout(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        total_work_hours: float,
    ) -> bool:
        """Close a record only if it is still open. Returns False otherwise."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def get_log_page(self, *, limit: int, offset: int) -> Sequence[AttendanceReportRow]:
        """All employees' records, newest check-in first."""

        raise NotImplementedError
