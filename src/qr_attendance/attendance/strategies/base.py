from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...employees.model import EmployeeProfile
from ...settings.model import GlobalAttendanceSettings
from ..model import AttendanceRecord, RecordResult
from ..repository import AttendanceRepository


class AttendanceTransition(ABC):
    """Strategy Pattern: one state transition of an employee's work day."""

    @abstractmethod
    def apply(
        self,
        *,
        attendance: AttendanceRepository,
        profile: EmployeeProfile,
        settings: GlobalAttendanceSettings,
        now: datetime,
        existing: Optional[AttendanceRecord],
    ) -> RecordResult:
        raise NotImplementedError
