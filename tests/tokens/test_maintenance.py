from datetime import datetime, timedelta

import pytest

from qr_attendance.core.enums import Role
from qr_attendance.core.exceptions import AuthorizationError
from qr_attendance.employees.session import SessionContext
from qr_attendance.tokens.maintenance import TokenMaintenanceService
from qr_attendance.tokens.model import AttendanceToken


def _token(token_id: str, issued_at: datetime) -> AttendanceToken:
    return AttendanceToken(token_id, issued_at, "secret", issued_at + timedelta(seconds=10))


def test_purge_deletes_only_tokens_from_previous_days(tokens_repo, clock):
    tokens_repo.create(_token("old", clock.now - timedelta(days=1)))
    tokens_repo.create(_token("midnight", clock.now.replace(hour=0, minute=0, second=0)))
    tokens_repo.create(_token("today", clock.now))

    deleted = TokenMaintenanceService(tokens_repo, clock=clock).purge_stale()

    assert deleted == 1
    assert set(tokens_repo.by_id) == {"midnight", "today"}


def test_purge_requires_settings_access(tokens_repo, clock):
    employee = SessionContext("e1", "E", roles=frozenset({Role.EMPLOYEE}))

    with pytest.raises(AuthorizationError):
        TokenMaintenanceService(tokens_repo, clock=clock).purge_stale(employee)


def test_admin_may_purge(tokens_repo, clock):
    admin = SessionContext("a1", "A", roles=frozenset({Role.ADMIN, Role.HR, Role.EMPLOYEE}))

    assert TokenMaintenanceService(tokens_repo, clock=clock).purge_stale(admin) == 0
