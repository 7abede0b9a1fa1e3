from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ...core.enums import ScanAction
from ...core.exceptions import CheckInConflict
from ...employees.model import EmployeeProfile
from ...settings.model import GlobalAttendanceSettings
from ..lateness import checkin_deadline, delay_minutes, scheduled_start
from ..model import AttendanceRecord, RecordResult
from ..repository import AttendanceRepository
from .base import AttendanceTransition

logger = logging.getLogger(__name__)


class CheckInTransition(AttendanceTransition):
    """No record today: open one and compute lateness."""

    def apply(
        self,
        *,
        attendance: AttendanceRepository,
        profile: EmployeeProfile,
        settings: GlobalAttendanceSettings,
        now: datetime,
        existing: Optional[AttendanceRecord],
    ) -> RecordResult:
        today = now.date()
        deadline = checkin_deadline(today, scheduled_start(profile, settings), settings.grace_period_minutes)
        delay = delay_minutes(now, deadline)

        record_id = attendance.create_checkin(
            employee_id=profile.employee_id,
            work_date=today,
            check_in_time=now,
            delay_minutes=delay,
        )
        if record_id is None:
            raise CheckInConflict(
                "Your check-in for today was already recorded from another scan",
                employee_id=profile.employee_id,
            )

        logger.info("employee %s checked in at %s (delay %d min)", profile.employee_id, now.isoformat(), delay)
        record = AttendanceRecord(
            record_id=record_id,
            employee_id=profile.employee_id,
            work_date=today,
            check_in_time=now,
            check_out_time=None,
            delay_minutes=delay,
            total_work_hours=0.0,
        )
        return RecordResult(
            action=ScanAction.CHECK_IN,
            record=record,
            message=f"Checked in at {now.strftime('%H:%M:%S')}. Delay: {delay} min",
        )
