from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from ..core.enums import ContractType, EmployeeStatus


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: an employee, keyed by the stable identity used at scan time.

    Plain data only (no DB access code).
    """

    employee_id: str
    login_id: str
    full_name: str
    password_hash: str
    contract_type: ContractType
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    custom_check_in_time: Optional[time] = None
    custom_check_out_time: Optional[time] = None
    base_salary: float = 0.0
    device_verification_enabled: bool = False
    device_id: Optional[str] = None
    permissions: tuple[str, ...] = field(default_factory=tuple)
    is_admin: bool = False
    is_hr: bool = False

    @property
    def is_active(self) -> bool:
        return self.status != EmployeeStatus.INACTIVE

    def scheduled_start(self, default: time) -> time:
        """Start of day for this employee; part-time contracts may override it."""
        if self.contract_type == ContractType.PART_TIME and self.custom_check_in_time:
            return self.custom_check_in_time
        return default
