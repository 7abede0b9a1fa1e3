from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_TOKEN_ROTATION_SECONDS, TOKEN_SECRET_BYTES
from ..core.exceptions import PersistenceError
from ..settings.repository import SettingsRepository
from .model import AttendanceToken, IssuedToken
from .payload import encode_payload
from .repository import TokenRepository

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Creates a fresh token per rotation; old tokens simply run out."""

    def __init__(
        self,
        tokens: TokenRepository,
        settings: SettingsRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        default_rotation_seconds: int = DEFAULT_TOKEN_ROTATION_SECONDS,
    ):
        self._tokens = tokens
        self._settings = settings
        self._clock = clock
        self._default_rotation_seconds = int(default_rotation_seconds)

    @property
    def default_rotation_seconds(self) -> int:
        return self._default_rotation_seconds

    def rotation_seconds(self) -> int:
        """Configured rotation interval, or the default if it cannot be read."""
        try:
            settings = self._settings.get()
            if settings is None or int(settings.token_rotation_seconds) <= 0:
                return self._default_rotation_seconds
            return int(settings.token_rotation_seconds)
        except PersistenceError as e:
            logger.warning("settings unavailable, using default rotation: %s", e)
        except Exception:
            logger.exception("unreadable attendance settings, using default rotation")
        return self._default_rotation_seconds

    def issue(self, *, now: Optional[datetime] = None) -> IssuedToken:
        now = now or self._clock()
        rotation = self.rotation_seconds()

        token = AttendanceToken(
            token_id=uuid.uuid4().hex,
            issued_at=now,
            secret=secrets.token_urlsafe(TOKEN_SECRET_BYTES),
            valid_until=now + timedelta(seconds=rotation),
        )
        token_id = self._tokens.create(token)
        logger.info("issued attendance token %s valid until %s", token_id, token.valid_until.isoformat())

        return IssuedToken(
            token_id=token_id,
            payload=encode_payload(token_id, token.secret),
            issued_at=token.issued_at,
            valid_until=token.valid_until,
            rotation_seconds=rotation,
        )
