from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AttendanceToken


class TokenRepository(Protocol):
    def get(self, token_id: str) -> Optional[AttendanceToken]:
        raise NotImplementedError

    def create(self, token: AttendanceToken) -> str:
        """Insert a new token. Existing tokens are never overwritten."""

        raise NotImplementedError

    def delete_issued_before(self, moment: datetime) -> int:
        raise NotImplementedError
