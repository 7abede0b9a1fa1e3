from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..employees.service import DeviceGuard
from ..tokens.verifier import TokenVerifier
from .model import RecordResult
from .recorder import AttendanceRecorder


class ScanService:
    """verify token -> device check -> record attendance."""

    def __init__(
        self,
        verifier: TokenVerifier,
        recorder: AttendanceRecorder,
        device_guard: DeviceGuard,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._verifier = verifier
        self._recorder = recorder
        self._device_guard = device_guard
        self._clock = clock

    def scan(
        self,
        identity: str,
        payload: str,
        *,
        device_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> RecordResult:
        now = now or self._clock()
        self._verifier.verify(payload, now=now)
        unbound_device = self._device_guard.check(identity, device_id)
        result = self._recorder.record(identity, now)
        if unbound_device:
            # first accepted scan after enabling verification
            self._device_guard.bind(identity, unbound_device)
        return result
