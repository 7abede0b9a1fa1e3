from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollEntry:
    """One employee's payroll for a month, as stored. Amounts are never recomputed here."""

    payroll_id: int
    employee_id: str
    year: int
    month: int
    base_salary: float
    allowances: float
    deductions: float
    net_salary: float
    overtime_pay: float = 0.0
    status: PayrollStatus = PayrollStatus.PENDING


@dataclass(frozen=True)
class PayrollRow:
    """Read-model for the payroll screen (joined with the employee)."""

    entry: PayrollEntry
    full_name: str
    login_id: str
