from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import SettingsMissing, UnknownEmployee
from ..employees.repository import EmployeeRepository
from ..settings.repository import SettingsRepository
from .factory import AttendanceTransitionFactory
from .model import RecordResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Turns an accepted scan into today's check-in or check-out.

    Per employee and day the record moves ``NoRecord -> Open -> Closed`` and
    never leaves ``Closed``. Races are settled by the repository: the create is
    guarded by the (employee, date) unique key and the check-out only applies
    while the record is still open.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: SettingsRepository,
        *,
        transitions: Optional[AttendanceTransitionFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings
        self._transitions = transitions or AttendanceTransitionFactory()
        self._clock = clock

    def record(self, identity: str, now: Optional[datetime] = None) -> RecordResult:
        now = now or self._clock()

        profile = self._employees.get_by_id(identity)
        if profile is None:
            logger.warning("scan by %s with no employee profile", identity)
            raise UnknownEmployee("No employee profile for this account", employee_id=identity)

        settings = self._settings.get()
        if settings is None:
            logger.error("attendance settings are not configured")
            raise SettingsMissing("Attendance settings are not configured", employee_id=identity)

        existing = self._attendance.get_for_employee_and_date(identity, now.date())
        transition = self._transitions.for_record(existing)
        return transition.apply(
            attendance=self._attendance,
            profile=profile,
            settings=settings,
            now=now,
            existing=existing,
        )
