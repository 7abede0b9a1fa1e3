from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for access decisions."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"


class ContractType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    INACTIVE = "inactive"


class ScanAction(str, Enum):
    """What a successful scan did to today's record."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class Screen(str, Enum):
    """Screen keys referenced by employee permissions."""

    DASHBOARD = "dashboard"
    EMPLOYEES = "employees"
    ATTENDANCE = "attendance"
    ATTENDANCE_QR = "attendance_qr"
    SCAN = "scan"
    PAYROLL = "payroll"
    REPORTS = "reports"
    SETTINGS = "settings"


class PayrollStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
