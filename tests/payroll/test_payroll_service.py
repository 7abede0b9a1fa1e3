import pytest

from qr_attendance.core.enums import PayrollStatus
from qr_attendance.core.exceptions import AuthorizationError, ValidationError
from qr_attendance.employees.session import SessionContext
from qr_attendance.payroll.service import PayrollService, parse_status


@pytest.fixture
def hr(new_employee):
    return SessionContext.for_employee(new_employee("hr", is_hr=True))


def test_month_report_shows_stored_figures(payroll_repo, hr):
    payroll_repo.add("e1", year=2026, month=3, net_salary=950.0, base_salary=1000.0, allowances=50.0, deductions=100.0)
    payroll_repo.add("ghost", year=2026, month=3, net_salary=10.0)

    report = PayrollService(payroll_repo).monthly_report(hr, year=2026, month=3)

    by_id = {r["employee_id"]: r for r in report.rows}
    assert by_id["e1"]["full_name"] == "Employee e1"
    assert by_id["e1"]["net_salary"] == 950.0
    assert by_id["e1"]["status"] == "pending"
    assert by_id["ghost"]["full_name"] == "Unknown employee"
    assert report.totals == {
        "employees": 2,
        "base_salary": 1010.0,
        "allowances": 50.0,
        "deductions": 100.0,
        "overtime_pay": 0.0,
        "net_salary": 960.0,
    }


def test_status_filter_keeps_only_paid(payroll_repo, hr):
    payroll_repo.add("e1", year=2026, month=3, net_salary=950.0, status=PayrollStatus.PAID)
    payroll_repo.add("e2", year=2026, month=3, net_salary=800.0)

    report = PayrollService(payroll_repo).monthly_report(hr, year=2026, month=3, status=PayrollStatus.PAID)

    assert [r["employee_id"] for r in report.rows] == ["e1"]
    assert report.totals["net_salary"] == 950.0


def test_empty_month_has_zero_totals(payroll_repo, hr):
    report = PayrollService(payroll_repo).monthly_report(hr, year=2026, month=1)

    assert report.rows == []
    assert report.totals["employees"] == 0


def test_employee_without_payroll_access_is_refused(payroll_repo, employees):
    ctx = SessionContext.for_employee(employees.get_by_id("e1"))

    with pytest.raises(AuthorizationError):
        PayrollService(payroll_repo).monthly_report(ctx, year=2026, month=3)


def test_granted_payroll_screen_is_enough(payroll_repo, new_employee):
    ctx = SessionContext.for_employee(new_employee("acct", permissions=("payroll",)))

    report = PayrollService(payroll_repo).monthly_report(ctx, year=2026, month=3)

    assert report.rows == []


@pytest.mark.parametrize("year,month", [(2026, 0), (2026, 13), (1999, 5)])
def test_out_of_range_period_is_rejected(payroll_repo, hr, year, month):
    with pytest.raises(ValidationError):
        PayrollService(payroll_repo).monthly_report(hr, year=year, month=month)


def test_parse_status():
    assert parse_status(None) is None
    assert parse_status(" Paid ") is PayrollStatus.PAID
    with pytest.raises(ValidationError):
        parse_status("refunded")
