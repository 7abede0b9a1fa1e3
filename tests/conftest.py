from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from qr_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from qr_attendance.core.enums import ContractType, PayrollStatus
from qr_attendance.employees.model import EmployeeProfile
from qr_attendance.payroll.model import PayrollEntry, PayrollRow
from qr_attendance.settings.model import GlobalAttendanceSettings
from qr_attendance.tokens.model import AttendanceToken


class InMemoryEmployees:
    def __init__(self, *profiles: EmployeeProfile):
        self.by_id: dict[str, EmployeeProfile] = {p.employee_id: p for p in profiles}

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        return self.by_id.get(employee_id)

    def get_by_login_id(self, login_id: str) -> Optional[EmployeeProfile]:
        for p in self.by_id.values():
            if p.login_id == login_id:
                return p
        return None

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda p: p.full_name)

    def create(self, profile: EmployeeProfile) -> str:
        self.by_id[profile.employee_id] = profile
        return profile.employee_id

    def update(self, profile: EmployeeProfile) -> bool:
        if profile.employee_id not in self.by_id:
            return False
        self.by_id[profile.employee_id] = profile
        return True

    def bind_device(self, employee_id: str, device_id: Optional[str]) -> bool:
        profile = self.by_id.get(employee_id)
        if profile is None:
            return False
        self.by_id[employee_id] = replace(profile, device_id=device_id)
        return True


class InMemorySettings:
    def __init__(self, settings: Optional[GlobalAttendanceSettings] = None):
        self.settings = settings

    def get(self) -> Optional[GlobalAttendanceSettings]:
        return self.settings

    def save(self, settings: GlobalAttendanceSettings) -> None:
        self.settings = settings


class InMemoryTokens:
    def __init__(self):
        self.by_id: dict[str, AttendanceToken] = {}

    def get(self, token_id: str) -> Optional[AttendanceToken]:
        return self.by_id.get(token_id)

    def create(self, token: AttendanceToken) -> str:
        self.by_id[token.token_id] = token
        return token.token_id

    def delete_issued_before(self, moment: datetime) -> int:
        stale = [k for k, t in self.by_id.items() if t.issued_at < moment]
        for k in stale:
            del self.by_id[k]
        return len(stale)


class InMemoryAttendance:
    """Keeps the (employee, date) uniqueness and the open-record check-out guard."""

    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self.employees = employees
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_key.get((employee_id, work_date))

    def get_recent_for_employee(self, employee_id: str, limit: int):
        items = [r for r in self.by_key.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_checkin(self, *, employee_id: str, work_date: date, check_in_time: datetime, delay_minutes: int):
        if (employee_id, work_date) in self.by_key:
            return None
        self._id += 1
        self.by_key[(employee_id, work_date)] = AttendanceRecord(
            record_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            delay_minutes=delay_minutes,
        )
        return self._id

    def close_checkout(self, *, record_id: int, check_out_time: datetime, total_work_hours: float) -> bool:
        for key, rec in self.by_key.items():
            if rec.record_id == record_id:
                if rec.check_out_time is not None:
                    return False
                self.by_key[key] = replace(rec, check_out_time=check_out_time, total_work_hours=total_work_hours)
                return True
        return False

    def get_report_rows(self, *, start_date: date, end_date: date, employee_id: Optional[str] = None):
        rows = []
        for rec in sorted(self.by_key.values(), key=lambda r: (r.work_date, r.employee_id)):
            if not (start_date <= rec.work_date <= end_date):
                continue
            if employee_id and rec.employee_id != employee_id:
                continue
            rows.append(self._report_row(rec))
        return rows

    def get_log_page(self, *, limit: int, offset: int):
        items = sorted(self.by_key.values(), key=lambda r: r.check_in_time, reverse=True)
        return [self._report_row(rec) for rec in items[offset : offset + limit]]

    def _report_row(self, rec: AttendanceRecord) -> AttendanceReportRow:
        profile = self.employees.get_by_id(rec.employee_id) if self.employees else None
        return AttendanceReportRow(
            employee_id=rec.employee_id,
            full_name=profile.full_name if profile else "",
            login_id=profile.login_id if profile else "",
            work_date=rec.work_date,
            check_in_time=rec.check_in_time,
            check_out_time=rec.check_out_time,
            delay_minutes=rec.delay_minutes,
            total_work_hours=rec.total_work_hours,
        )


class InMemoryPayrolls:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self.employees = employees
        self.entries: list[PayrollEntry] = []

    def add(self, employee_id: str, *, year: int, month: int, net_salary: float, **overrides) -> PayrollEntry:
        fields = dict(
            payroll_id=len(self.entries) + 1,
            employee_id=employee_id,
            year=year,
            month=month,
            base_salary=net_salary,
            allowances=0.0,
            deductions=0.0,
            net_salary=net_salary,
        )
        fields.update(overrides)
        entry = PayrollEntry(**fields)
        self.entries.append(entry)
        return entry

    def list_for_month(self, *, year: int, month: int, status: Optional[PayrollStatus] = None):
        rows = []
        for p in self.entries:
            if (p.year, p.month) != (year, month):
                continue
            if status is not None and p.status != status:
                continue
            profile = self.employees.get_by_id(p.employee_id) if self.employees else None
            rows.append(
                PayrollRow(
                    entry=p,
                    full_name=profile.full_name if profile else "Unknown employee",
                    login_id=profile.login_id if profile else "",
                )
            )
        return rows


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_employee(employee_id: str = "e1", **overrides) -> EmployeeProfile:
    fields = dict(
        employee_id=employee_id,
        login_id=employee_id,
        full_name=f"Employee {employee_id}",
        password_hash=generate_password_hash("secret1"),
        contract_type=ContractType.FULL_TIME,
        hire_date=date(2024, 1, 1),
    )
    fields.update(overrides)
    return EmployeeProfile(**fields)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 55, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def office_settings() -> GlobalAttendanceSettings:
    return GlobalAttendanceSettings(
        check_in_time=time(9, 0),
        check_out_time=time(17, 0),
        grace_period_minutes=5,
        token_rotation_seconds=10,
    )


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(make_employee("e1"))


@pytest.fixture
def settings_repo(office_settings) -> InMemorySettings:
    return InMemorySettings(office_settings)


@pytest.fixture
def tokens_repo() -> InMemoryTokens:
    return InMemoryTokens()


@pytest.fixture
def attendance_repo(employees) -> InMemoryAttendance:
    return InMemoryAttendance(employees)


@pytest.fixture
def new_employee():
    return make_employee


@pytest.fixture
def payroll_repo(employees) -> InMemoryPayrolls:
    return InMemoryPayrolls(employees)
