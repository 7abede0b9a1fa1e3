from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ScanAction


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's work day (at most one per employee per date)."""

    record_id: int
    employee_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    delay_minutes: int = 0
    total_work_hours: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class RecordResult:
    """Outcome of a successful scan, shown to the actor."""

    action: ScanAction
    record: AttendanceRecord
    message: str


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports (joined with the employee)."""

    employee_id: str
    full_name: str
    login_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    delay_minutes: int
    total_work_hours: float
