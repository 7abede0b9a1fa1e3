from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ...common.datetime_utils import hours_between
from ...core.enums import ScanAction
from ...core.exceptions import AlreadyCompleted, WorkHoursAnomaly
from ...employees.model import EmployeeProfile
from ...settings.model import GlobalAttendanceSettings
from ..model import AttendanceRecord, RecordResult
from ..repository import AttendanceRepository
from .base import AttendanceTransition

logger = logging.getLogger(__name__)


class CheckOutTransition(AttendanceTransition):
    """Open record today: close it and accrue work hours."""

    def apply(
        self,
        *,
        attendance: AttendanceRepository,
        profile: EmployeeProfile,
        settings: GlobalAttendanceSettings,
        now: datetime,
        existing: Optional[AttendanceRecord],
    ) -> RecordResult:
        if existing is None:
            raise ValueError("check-out needs an open record for today")
        if not existing.is_open:
            raise AlreadyCompleted("You have already checked in and out today", employee_id=profile.employee_id)

        hours = hours_between(existing.check_in_time, now)
        if hours < 0:
            logger.error(
                "negative work duration for record %s (employee %s): %.4f h",
                existing.record_id, profile.employee_id, hours,
            )
            raise WorkHoursAnomaly(
                "Check-out time is before check-in time; contact HR to correct the record",
                employee_id=profile.employee_id,
                record_id=existing.record_id,
                hours=hours,
            )

        if not attendance.close_checkout(record_id=existing.record_id, check_out_time=now, total_work_hours=hours):
            # Lost the race to another check-out.
            raise AlreadyCompleted(
                "You have already checked in and out today",
                employee_id=profile.employee_id,
            )

        logger.info("employee %s checked out at %s (%.2f h)", profile.employee_id, now.isoformat(), hours)
        return RecordResult(
            action=ScanAction.CHECK_OUT,
            record=replace(existing, check_out_time=now, total_work_hours=hours),
            message=f"Checked out at {now.strftime('%H:%M:%S')}",
        )
