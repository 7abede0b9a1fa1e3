from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.exceptions import AlreadyCompleted
from ...employees.model import EmployeeProfile
from ...settings.model import GlobalAttendanceSettings
from ..model import AttendanceRecord, RecordResult
from ..repository import AttendanceRepository
from .base import AttendanceTransition


class ClosedDayTransition(AttendanceTransition):
    """Closed record: nothing leaves this state."""

    def apply(
        self,
        *,
        attendance: AttendanceRepository,
        profile: EmployeeProfile,
        settings: GlobalAttendanceSettings,
        now: datetime,
        existing: Optional[AttendanceRecord],
    ) -> RecordResult:
        raise AlreadyCompleted("You have already checked in and out today", employee_id=profile.employee_id)
