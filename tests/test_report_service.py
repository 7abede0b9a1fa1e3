from datetime import date, datetime

import pytest

from qr_attendance.core.exceptions import AuthorizationError, ValidationError
from qr_attendance.employees.session import SessionContext
from qr_attendance.reports.service import AttendanceReportService


@pytest.fixture
def filled(attendance_repo, employees, new_employee):
    employees.create(new_employee("e2"))
    attendance_repo.create_checkin(employee_id="e1", work_date=date(2026, 3, 2), check_in_time=datetime(2026, 3, 2, 8), delay_minutes=0)
    attendance_repo.close_checkout(record_id=1, check_out_time=datetime(2026, 3, 2, 17, 30), total_work_hours=9.5)
    attendance_repo.create_checkin(employee_id="e2", work_date=date(2026, 3, 2), check_in_time=datetime(2026, 3, 2, 9, 20), delay_minutes=15)
    attendance_repo.create_checkin(employee_id="e1", work_date=date(2026, 3, 3), check_in_time=datetime(2026, 3, 3, 9), delay_minutes=0)
    return attendance_repo


def test_hr_report_summarises_every_employee(filled, new_employee):
    hr = SessionContext.for_employee(new_employee("hr", is_hr=True))

    data = AttendanceReportService(filled).build_attendance_report(hr, start=date(2026, 3, 1), end=date(2026, 3, 31))

    assert len(data.rows) == 3
    by_id = {s["employee_id"]: s for s in data.summary}
    assert by_id["e1"]["days"] == 2
    assert by_id["e1"]["open_days"] == 1
    assert by_id["e1"]["total_hours"] == "09:30"
    assert by_id["e2"]["late_days"] == 1
    assert by_id["e2"]["total_delay_minutes"] == 15
    assert data.summary[0]["employee_id"] == "e1"


def test_employee_without_report_access_sees_only_own_rows(filled, employees):
    ctx = SessionContext.for_employee(employees.get_by_id("e2"))
    service = AttendanceReportService(filled)

    data = service.build_attendance_report(ctx, start=date(2026, 3, 1), end=date(2026, 3, 31))
    assert {r["employee_id"] for r in data.rows} == {"e2"}

    with pytest.raises(AuthorizationError):
        service.build_attendance_report(ctx, start=date(2026, 3, 1), end=date(2026, 3, 31), employee_id="e1")


def test_reversed_range_is_rejected(filled, employees):
    ctx = SessionContext.for_employee(employees.get_by_id("e1"))

    with pytest.raises(ValidationError):
        AttendanceReportService(filled).build_attendance_report(ctx, start=date(2026, 3, 5), end=date(2026, 3, 1))
