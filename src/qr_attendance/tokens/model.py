from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AttendanceToken:
    """Domain entity: one rotation's proof-of-presence token. Never mutated."""

    token_id: str
    issued_at: datetime
    secret: str
    valid_until: datetime

    def is_valid_at(self, moment: datetime) -> bool:
        return moment < self.valid_until


@dataclass(frozen=True)
class IssuedToken:
    """What the display side needs: the scannable payload and its countdown."""

    token_id: str
    payload: str
    issued_at: datetime
    valid_until: datetime
    rotation_seconds: int

    def seconds_remaining(self, now: datetime) -> int:
        left = (self.valid_until - now).total_seconds()
        return max(0, math.ceil(left))
