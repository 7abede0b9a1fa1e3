from __future__ import annotations

from typing import Optional, Protocol

from .model import GlobalAttendanceSettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[GlobalAttendanceSettings]:
        """Return the stored settings, or ``None`` when never configured."""

        raise NotImplementedError

    def save(self, settings: GlobalAttendanceSettings) -> None:
        raise NotImplementedError
