from __future__ import annotations

import logging
from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_non_negative
from ..core.constants import (
    DEFAULT_CHECK_IN_TIME,
    DEFAULT_CHECK_OUT_TIME,
    DEFAULT_GRACE_MINUTES,
    DEFAULT_TOKEN_ROTATION_SECONDS,
)
from ..core.enums import Screen
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.session import SessionContext, can_view
from .model import GlobalAttendanceSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def default_settings() -> GlobalAttendanceSettings:
    return GlobalAttendanceSettings(
        check_in_time=parse_hhmm(DEFAULT_CHECK_IN_TIME),
        check_out_time=parse_hhmm(DEFAULT_CHECK_OUT_TIME),
        grace_period_minutes=DEFAULT_GRACE_MINUTES,
        token_rotation_seconds=DEFAULT_TOKEN_ROTATION_SECONDS,
    )


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def current(self) -> Optional[GlobalAttendanceSettings]:
        return self._settings.get()

    def update(
        self,
        session: SessionContext,
        *,
        check_in_time: Optional[str] = None,
        check_out_time: Optional[str] = None,
        grace_period_minutes: Optional[int] = None,
        token_rotation_seconds: Optional[int] = None,
    ) -> GlobalAttendanceSettings:
        if not can_view(session, Screen.SETTINGS.value):
            raise AuthorizationError("You do not have permission to change settings")

        base = self._settings.get() or default_settings()
        new = GlobalAttendanceSettings(
            check_in_time=parse_hhmm(check_in_time) if check_in_time is not None else base.check_in_time,
            check_out_time=parse_hhmm(check_out_time) if check_out_time is not None else base.check_out_time,
            grace_period_minutes=(
                require_non_negative(grace_period_minutes, "Grace period")
                if grace_period_minutes is not None
                else base.grace_period_minutes
            ),
            token_rotation_seconds=(
                require_non_negative(token_rotation_seconds, "Token rotation")
                if token_rotation_seconds is not None
                else base.token_rotation_seconds
            ),
        )
        if new.token_rotation_seconds < 1:
            raise ValidationError("Token rotation must be at least one second")
        if new.check_out_time <= new.check_in_time:
            raise ValidationError("Check-out time must be after check-in time")

        self._settings.save(new)
        logger.info("attendance settings updated by %s: %s", session.identity, new)
        return new
