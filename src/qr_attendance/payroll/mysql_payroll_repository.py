from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PayrollEntry, PayrollRow
from .repository import PayrollRepository

UNKNOWN_EMPLOYEE_NAME = "Unknown employee"


def _to_row(r: Dict[str, Any]) -> PayrollRow:
    entry = PayrollEntry(
        payroll_id=int(r["payroll_id"]),
        employee_id=str(r["employee_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        base_salary=float(r.get("base_salary") or 0),
        allowances=float(r.get("allowances") or 0),
        deductions=float(r.get("deductions") or 0),
        net_salary=float(r.get("net_salary") or 0),
        overtime_pay=float(r.get("overtime_pay") or 0),
        status=PayrollStatus(r.get("status") or PayrollStatus.PENDING.value),
    )
    return PayrollRow(
        entry=entry,
        full_name=r.get("full_name") or UNKNOWN_EMPLOYEE_NAME,
        login_id=r.get("login_id") or "",
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_month(
        self,
        *,
        year: int,
        month: int,
        status: Optional[PayrollStatus] = None,
    ) -> Sequence[PayrollRow]:
        clauses = ["p.year=%s", "p.month=%s"]
        params: list[object] = [int(year), int(month)]

        if status is not None:
            clauses.append("p.status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory, operation="query", target=f"payrolls?year={year}&month={month}") as (_, cur):
            cur.execute(
                f"""
                SELECT
                    p.payroll_id, p.employee_id, p.year, p.month,
                    p.base_salary, p.allowances, p.deductions, p.net_salary,
                    p.overtime_pay, p.status,
                    e.full_name, e.login_id
                FROM payrolls p
                LEFT JOIN employees e ON e.employee_id = p.employee_id
                WHERE {where}
                ORDER BY e.full_name ASC, p.employee_id ASC
                """,
                tuple(params),
            )
            return [_to_row(r) for r in fetchall(cur)]
