from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from .issuer import TokenIssuer
from .model import IssuedToken

logger = logging.getLogger(__name__)


class TokenRotator:
    """Runs the issuer on a timer until stopped.

    Use as a context manager to tie the timer to the lifetime of whatever
    displays the code::

        with TokenRotator(issuer) as rotator:
            ...
    """

    def __init__(self, issuer: TokenIssuer, *, clock: Callable[[], datetime] = now_local):
        self._issuer = issuer
        self._clock = clock
        self._current: Optional[IssuedToken] = None
        self._last_delay = float(issuer.default_rotation_seconds)
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def current(self) -> Optional[IssuedToken]:
        with self._lock:
            return self._current

    def seconds_remaining(self, now: Optional[datetime] = None) -> int:
        current = self.current()
        if current is None:
            return 0
        return current.seconds_remaining(now or self._clock())

    def tick(self) -> float:
        """Rotate once and return the delay before the next rotation.

        A failed issuance keeps the previous token and still schedules the next
        attempt, so scanners are never left without a rotation.
        """
        try:
            issued = self._issuer.issue()
        except Exception:
            logger.exception("token rotation failed, retrying in %.0f s", self._last_delay)
            return self._last_delay

        with self._lock:
            self._current = issued
        self._last_delay = float(issued.rotation_seconds)
        return self._last_delay

    def ensure_current(self) -> IssuedToken:
        """Return a still-valid token, issuing one on demand if needed.

        Unlike ``tick`` this propagates issuance failures to the caller.
        """
        current = self.current()
        if current is not None and current.seconds_remaining(self._clock()) > 0:
            return current

        issued = self._issuer.issue()
        with self._lock:
            self._current = issued
        return issued

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="qr-token-rotator", daemon=True)
        self._thread.start()
        logger.info("token rotator started")

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("token rotator stopped")

    def _run(self) -> None:
        while not self._stop.is_set():
            delay = self.tick()
            if self._stop.wait(delay):
                break

    def __enter__(self) -> "TokenRotator":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
