from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class GlobalAttendanceSettings:
    """Company-wide attendance baseline."""

    check_in_time: time
    check_out_time: time
    grace_period_minutes: int = 0
    token_rotation_seconds: int = 10
