from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import ContractType, EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, login_id, full_name, password_hash, contract_type,
    custom_check_in_time, custom_check_out_time, hire_date, status, base_salary,
    device_verification_enabled, device_id, permissions, is_admin, is_hr
"""


def _to_profile(r: Dict[str, Any]) -> EmployeeProfile:
    permissions = tuple(p for p in (r.get("permissions") or "").split(",") if p)
    return EmployeeProfile(
        employee_id=str(r["employee_id"]),
        login_id=r["login_id"],
        full_name=r["full_name"],
        password_hash=r["password_hash"],
        contract_type=ContractType(r["contract_type"]),
        custom_check_in_time=normalize_mysql_time(r.get("custom_check_in_time")),
        custom_check_out_time=normalize_mysql_time(r.get("custom_check_out_time")),
        hire_date=r["hire_date"],
        status=EmployeeStatus(r["status"]),
        base_salary=float(r.get("base_salary") or 0),
        device_verification_enabled=bool(r.get("device_verification_enabled")),
        device_id=r.get("device_id"),
        permissions=permissions,
        is_admin=bool(r.get("is_admin")),
        is_hr=bool(r.get("is_hr")),
    )


def _to_params(p: EmployeeProfile) -> tuple:
    return (
        p.login_id,
        p.full_name,
        p.password_hash,
        p.contract_type.value,
        p.custom_check_in_time,
        p.custom_check_out_time,
        p.hire_date,
        p.status.value,
        p.base_salary,
        int(p.device_verification_enabled),
        p.device_id,
        ",".join(p.permissions),
        int(p.is_admin),
        int(p.is_hr),
        p.employee_id,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory, operation="get", target=f"employees/{employee_id}") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_login_id(self, login_id: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory, operation="get", target=f"employees?login_id={login_id}") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE login_id=%s", (login_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_all(self) -> Sequence[EmployeeProfile]:
        with db_cursor(self._conn_factory, operation="query", target="employees") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY full_name")
            return [_to_profile(r) for r in fetchall(cur)]

    def create(self, profile: EmployeeProfile) -> str:
        with db_cursor(self._conn_factory, operation="create", target=f"employees/{profile.employee_id}") as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(login_id, full_name, password_hash, contract_type,
                                      custom_check_in_time, custom_check_out_time, hire_date, status,
                                      base_salary, device_verification_enabled, device_id, permissions,
                                      is_admin, is_hr, employee_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _to_params(profile),
            )
            return profile.employee_id

    def update(self, profile: EmployeeProfile) -> bool:
        with db_cursor(self._conn_factory, operation="update", target=f"employees/{profile.employee_id}") as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET login_id=%s, full_name=%s, password_hash=%s, contract_type=%s,
                    custom_check_in_time=%s, custom_check_out_time=%s, hire_date=%s, status=%s,
                    base_salary=%s, device_verification_enabled=%s, device_id=%s, permissions=%s,
                    is_admin=%s, is_hr=%s
                WHERE employee_id=%s
                """,
                _to_params(profile),
            )
            return cur.rowcount > 0

    def bind_device(self, employee_id: str, device_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory, operation="update", target=f"employees/{employee_id}") as (_, cur):
            cur.execute("UPDATE employees SET device_id=%s WHERE employee_id=%s", (device_id, employee_id))
            return cur.rowcount > 0
