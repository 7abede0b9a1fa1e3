from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .model import AttendanceRecord
from .strategies.base import AttendanceTransition
from .strategies.check_in import CheckInTransition
from .strategies.check_out import CheckOutTransition
from .strategies.closed import ClosedDayTransition


@dataclass
class AttendanceTransitionFactory:
    """Factory Pattern: pick the transition for today's record state."""

    def for_record(self, existing: Optional[AttendanceRecord]) -> AttendanceTransition:
        if existing is None:
            return CheckInTransition()
        if existing.is_open:
            return CheckOutTransition()
        return ClosedDayTransition()
