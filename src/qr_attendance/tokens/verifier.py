from __future__ import annotations

import hmac
import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.exceptions import TokenExpired, TokenForged, TokenNotFound
from .model import AttendanceToken
from .payload import decode_payload
from .repository import TokenRepository

logger = logging.getLogger(__name__)


class TokenVerifier:
    """Accepts or rejects a scanned payload. Read-only: safe to call concurrently."""

    def __init__(self, tokens: TokenRepository, *, clock: Callable[[], datetime] = now_local):
        self._tokens = tokens
        self._clock = clock

    def verify(self, payload: str, *, now: Optional[datetime] = None) -> AttendanceToken:
        token_id, supplied_secret = decode_payload(payload)

        token = self._tokens.get(token_id)
        if token is None:
            logger.info("rejected scan: token %s not found", token_id)
            raise TokenNotFound("This code is not recognised. Scan the current code.")

        if not hmac.compare_digest(supplied_secret.encode("utf-8"), token.secret.encode("utf-8")):
            logger.warning("rejected scan: forged secret for token %s", token_id)
            raise TokenForged("This code is not valid.")

        now = now or self._clock()
        if not token.is_valid_at(now):
            logger.info("rejected scan: token %s expired at %s", token_id, token.valid_until.isoformat())
            raise TokenExpired("This code has expired. Wait for the next one and scan again.")

        return token
