from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import MIN_PAYROLL_YEAR
from ..core.enums import PayrollStatus, Screen
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.session import SessionContext, can_view
from .repository import PayrollRepository


@dataclass(frozen=True)
class PayrollReport:
    year: int
    month: int
    rows: list[dict]
    totals: dict


def parse_status(value: Optional[str]) -> Optional[PayrollStatus]:
    if not value:
        return None
    try:
        return PayrollStatus(value.strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown payroll status: {value}")


class PayrollService:
    """Monthly payroll listing for HR. Shows stored figures, computes nothing but sums."""

    def __init__(self, payroll: PayrollRepository):
        self._payroll = payroll

    def monthly_report(
        self,
        session: SessionContext,
        *,
        year: int,
        month: int,
        status: Optional[PayrollStatus] = None,
    ) -> PayrollReport:
        if not can_view(session, Screen.PAYROLL.value):
            raise AuthorizationError("You do not have access to payroll")
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if year < MIN_PAYROLL_YEAR:
            raise ValidationError(f"Year must be {MIN_PAYROLL_YEAR} or later")

        rows: list[dict] = []
        totals = {
            "employees": 0,
            "base_salary": 0.0,
            "allowances": 0.0,
            "deductions": 0.0,
            "overtime_pay": 0.0,
            "net_salary": 0.0,
        }

        for r in self._payroll.list_for_month(year=year, month=month, status=status):
            p = r.entry
            rows.append(
                {
                    "payroll_id": p.payroll_id,
                    "employee_id": p.employee_id,
                    "full_name": r.full_name,
                    "login_id": r.login_id,
                    "period": f"{p.year:04d}-{p.month:02d}",
                    "base_salary": p.base_salary,
                    "allowances": p.allowances,
                    "deductions": p.deductions,
                    "overtime_pay": p.overtime_pay,
                    "net_salary": p.net_salary,
                    "status": p.status.value,
                }
            )
            totals["employees"] += 1
            totals["base_salary"] += p.base_salary
            totals["allowances"] += p.allowances
            totals["deductions"] += p.deductions
            totals["overtime_pay"] += p.overtime_pay
            totals["net_salary"] += p.net_salary

        for key in ("base_salary", "allowances", "deductions", "overtime_pay", "net_salary"):
            totals[key] = round(totals[key], 2)

        return PayrollReport(year=year, month=month, rows=rows, totals=totals)
