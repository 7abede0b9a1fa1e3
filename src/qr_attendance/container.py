from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.factory import AttendanceTransitionFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.scan import ScanService
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_TOKEN_ROTATION_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, DeviceGuard, EmployeeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import AttendanceReportService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .tokens.issuer import TokenIssuer
from .tokens.maintenance import TokenMaintenanceService
from .tokens.mysql_token_repository import MySQLTokenRepository
from .tokens.repository import TokenRepository
from .tokens.rotator import TokenRotator
from .tokens.verifier import TokenVerifier


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    settings_repo: SettingsRepository
    tokens_repo: TokenRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    auth_service: AuthService
    employee_service: EmployeeService
    device_guard: DeviceGuard
    settings_service: SettingsService
    token_issuer: TokenIssuer
    token_verifier: TokenVerifier
    token_rotator: TokenRotator
    token_maintenance: TokenMaintenanceService
    attendance_recorder: AttendanceRecorder
    scan_service: ScanService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    payroll_service: PayrollService

    clock: Callable[[], datetime] = now_local


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    settings_repo: SettingsRepository,
    tokens_repo: TokenRepository,
    attendance_repo: AttendanceRepository,
    payroll_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
    default_rotation_seconds: int = DEFAULT_TOKEN_ROTATION_SECONDS,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build every service on top of the given repositories."""
    device_guard = DeviceGuard(employees_repo)
    token_issuer = TokenIssuer(
        tokens_repo,
        settings_repo,
        clock=clock,
        default_rotation_seconds=default_rotation_seconds,
    )
    token_verifier = TokenVerifier(tokens_repo, clock=clock)
    attendance_recorder = AttendanceRecorder(
        attendance_repo,
        employees_repo,
        settings_repo,
        transitions=AttendanceTransitionFactory(),
        clock=clock,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        settings_repo=settings_repo,
        tokens_repo=tokens_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        device_guard=device_guard,
        settings_service=SettingsService(settings_repo),
        token_issuer=token_issuer,
        token_verifier=token_verifier,
        token_rotator=TokenRotator(token_issuer, clock=clock),
        token_maintenance=TokenMaintenanceService(tokens_repo, clock=clock),
        attendance_recorder=attendance_recorder,
        scan_service=ScanService(token_verifier, attendance_recorder, device_guard, clock=clock),
        attendance_service=AttendanceService(attendance_repo),
        report_service=AttendanceReportService(attendance_repo),
        payroll_service=PayrollService(payroll_repo),
        clock=clock,
    )


def build_container(
    *,
    db_config: dict,
    default_rotation_seconds: int = DEFAULT_TOKEN_ROTATION_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        tokens_repo=MySQLTokenRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        conn=conn,
        default_rotation_seconds=default_rotation_seconds,
    )
