from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..employees.model import EmployeeProfile
from ..settings.model import GlobalAttendanceSettings


def scheduled_start(profile: EmployeeProfile, settings: GlobalAttendanceSettings) -> time:
    return profile.scheduled_start(settings.check_in_time)


def checkin_deadline(today: date, start: time, grace_minutes: int) -> datetime:
    """Last instant that still counts as on time."""
    return datetime.combine(today, start) + timedelta(minutes=int(grace_minutes or 0))


def delay_minutes(now: datetime, deadline: datetime) -> int:
    """Whole minutes past the deadline; 0 at or before it."""
    if now <= deadline:
        return 0
    return int((now - deadline) // timedelta(minutes=1))
