from qr_attendance.core.enums import Role, Screen
from qr_attendance.employees.session import SessionContext, can_view


def test_admin_implies_hr(new_employee):
    ctx = SessionContext.for_employee(new_employee("a", is_admin=True))

    assert ctx.is_admin and ctx.is_hr
    assert can_view(ctx, Screen.SETTINGS.value)


def test_hr_sees_hr_screens_but_not_settings(new_employee):
    ctx = SessionContext.for_employee(new_employee("h", is_hr=True))

    assert can_view(ctx, Screen.EMPLOYEES.value)
    assert can_view(ctx, Screen.REPORTS.value)
    assert not can_view(ctx, Screen.SETTINGS.value)


def test_employee_gets_base_screens_plus_granted(new_employee):
    ctx = SessionContext.for_employee(new_employee("e", permissions=(Screen.REPORTS.value,)))

    assert ctx.roles == frozenset({Role.EMPLOYEE})
    assert can_view(ctx, Screen.SCAN.value)
    assert can_view(ctx, Screen.REPORTS.value)
    assert not can_view(ctx, Screen.EMPLOYEES.value)


def test_no_session_sees_nothing():
    assert not can_view(None, Screen.DASHBOARD.value)


def test_session_survives_dict_round_trip(new_employee):
    ctx = SessionContext.for_employee(new_employee("h", is_hr=True, permissions=("payroll",)))

    assert SessionContext.from_dict(ctx.to_dict()) == ctx
    assert SessionContext.from_dict({}) is None
