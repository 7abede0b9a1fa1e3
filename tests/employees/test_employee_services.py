from dataclasses import replace
from datetime import time

import pytest

from qr_attendance.core.enums import ContractType, EmployeeStatus
from qr_attendance.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from qr_attendance.employees.service import AuthService, DeviceGuard, EmployeeService
from qr_attendance.employees.session import SessionContext


@pytest.fixture
def admin(employees, new_employee):
    profile = new_employee("admin", is_admin=True)
    employees.create(profile)
    return SessionContext.for_employee(profile)


def test_login_with_valid_credentials(employees):
    ctx = AuthService(employees).authenticate("e1", "secret1")

    assert ctx.identity == "e1"


@pytest.mark.parametrize("login_id,password", [("e1", "wrong"), ("nobody", "secret1"), ("", "")])
def test_login_rejects_bad_credentials(employees, login_id, password):
    with pytest.raises(AuthenticationError):
        AuthService(employees).authenticate(login_id, password)


def test_inactive_employee_cannot_log_in(employees):
    employees.update(replace(employees.get_by_id("e1"), status=EmployeeStatus.INACTIVE))

    with pytest.raises(AuthenticationError):
        AuthService(employees).authenticate("e1", "secret1")


def test_placeholder_hash_does_not_crash_login(employees):
    employees.update(replace(employees.get_by_id("e1"), password_hash="CHANGE_ME"))

    with pytest.raises(AuthenticationError):
        AuthService(employees).authenticate("e1", "secret1")


def test_create_part_time_employee_hashes_password(employees, admin):
    profile = EmployeeService(employees).create(
        admin,
        login_id="pt",
        full_name="Part Timer",
        password="hunter22",
        contract_type="part-time",
        custom_check_in_time="13:00",
        base_salary=1200.5,
    )

    assert profile.contract_type == ContractType.PART_TIME
    assert profile.custom_check_in_time == time(13, 0)
    assert profile.password_hash != "hunter22"
    assert AuthService(employees).authenticate("pt", "hunter22").identity == profile.employee_id


def test_create_rejects_duplicate_login_and_short_password(employees, admin):
    svc = EmployeeService(employees)
    with pytest.raises(ValidationError):
        svc.create(admin, login_id="e1", full_name="Dup", password="longenough")
    with pytest.raises(ValidationError):
        svc.create(admin, login_id="new", full_name="New", password="123")


def test_only_admin_grants_hr(employees, new_employee):
    hr_profile = new_employee("hr", is_hr=True)
    employees.create(hr_profile)
    hr = SessionContext.for_employee(hr_profile)

    with pytest.raises(AuthorizationError):
        EmployeeService(employees).create(hr, login_id="x", full_name="X", password="secret1", is_hr=True)


def test_plain_employee_cannot_manage(employees):
    ctx = SessionContext.for_employee(employees.get_by_id("e1"))

    with pytest.raises(AuthorizationError):
        EmployeeService(employees).list_all(ctx)


def test_update_rejects_unknown_fields(employees, admin):
    with pytest.raises(ValidationError):
        EmployeeService(employees).update(admin, "e1", salary_grade=3)


def test_deactivate_and_reset_device(employees, admin):
    employees.bind_device("e1", "phone")
    svc = EmployeeService(employees)

    svc.reset_device(admin, "e1")
    svc.deactivate(admin, "e1")

    profile = employees.get_by_id("e1")
    assert profile.device_id is None
    assert profile.status == EmployeeStatus.INACTIVE


def test_cannot_deactivate_self(employees, admin):
    with pytest.raises(ValidationError):
        EmployeeService(employees).deactivate(admin, "admin")


def test_device_check_reports_unbound_device_without_writing(employees, new_employee):
    employees.create(new_employee("dv", device_verification_enabled=True))
    guard = DeviceGuard(employees)

    assert guard.check("dv", " phone-1 ") == "phone-1"
    assert employees.get_by_id("dv").device_id is None

    guard.bind("dv", "phone-1")
    assert guard.check("dv", "phone-1") is None
    assert guard.check("e1", None) is None
