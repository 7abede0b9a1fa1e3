from datetime import time

import pytest

from qr_attendance.core.exceptions import AuthorizationError, ValidationError
from qr_attendance.employees.session import SessionContext
from qr_attendance.settings.service import SettingsService


@pytest.fixture
def admin(new_employee):
    return SessionContext.for_employee(new_employee("admin", is_admin=True))


def test_partial_update_keeps_other_fields(settings_repo, admin):
    updated = SettingsService(settings_repo).update(admin, grace_period_minutes=15)

    assert updated.grace_period_minutes == 15
    assert updated.check_in_time == time(9, 0)
    assert settings_repo.get() == updated


def test_first_save_starts_from_defaults(settings_repo, admin):
    settings_repo.settings = None
    saved = SettingsService(settings_repo).update(admin, token_rotation_seconds=20)

    assert saved.token_rotation_seconds == 20
    assert saved.check_out_time == time(17, 0)


@pytest.mark.parametrize(
    "changes",
    [
        {"token_rotation_seconds": 0},
        {"grace_period_minutes": -1},
        {"check_in_time": "18:00"},
        {"check_out_time": "25:00"},
    ],
)
def test_invalid_updates_are_rejected(settings_repo, admin, changes):
    before = settings_repo.get()

    with pytest.raises(ValidationError):
        SettingsService(settings_repo).update(admin, **changes)
    assert settings_repo.get() == before


def test_hr_cannot_change_settings(settings_repo, new_employee):
    hr = SessionContext.for_employee(new_employee("hr", is_hr=True))

    with pytest.raises(AuthorizationError):
        SettingsService(settings_repo).update(hr, grace_period_minutes=1)
