from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import local_midnight, now_local
from ..core.enums import Screen
from ..core.exceptions import AuthorizationError
from ..employees.session import SessionContext, can_view
from .repository import TokenRepository

logger = logging.getLogger(__name__)


class TokenMaintenanceService:
    """Garbage-collects tokens issued before today."""

    def __init__(self, tokens: TokenRepository, *, clock: Callable[[], datetime] = now_local):
        self._tokens = tokens
        self._clock = clock

    def purge_stale(self, session: Optional[SessionContext] = None, *, now: Optional[datetime] = None) -> int:
        # session is None only for trusted callers (scripts)
        if session is not None and not can_view(session, Screen.SETTINGS.value):
            raise AuthorizationError("You do not have permission to purge tokens")

        cutoff = local_midnight(now or self._clock())
        deleted = self._tokens.delete_issued_before(cutoff)
        logger.info("purged %d attendance tokens issued before %s", deleted, cutoff.isoformat())
        return deleted
