from __future__ import annotations

import hmac
import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_min_length, require_non_empty, require_non_negative_amount
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ContractType, EmployeeStatus, Screen
from ..core.exceptions import AuthenticationError, AuthorizationError, DeviceMismatch, UnknownEmployee, ValidationError
from .model import EmployeeProfile
from .repository import EmployeeRepository
from .session import SessionContext, can_view

logger = logging.getLogger(__name__)

_KNOWN_SCREENS = {s.value for s in Screen}


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, login_id: str, password: str) -> SessionContext:
        profile = self._employees.get_by_login_id((login_id or "").strip())
        if not profile or not profile.is_active:
            raise AuthenticationError("Invalid login or password")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("failed login for %s", login_id)
            raise AuthenticationError("Invalid login or password")

        return SessionContext.for_employee(profile)


class DeviceGuard:
    """Enforces device binding before a scan reaches the recorder.

    ``check`` never writes. When the account has no bound device yet it returns
    the device to bind, and the caller binds it once the scan is recorded.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def check(self, employee_id: str, device_id: Optional[str]) -> Optional[str]:
        profile = self._employees.get_by_id(employee_id)
        if not profile:
            raise UnknownEmployee("No employee profile for this account", employee_id=employee_id)
        if not profile.device_verification_enabled:
            return None

        device_id = device_id.strip() if isinstance(device_id, str) else ""
        if not device_id:
            raise DeviceMismatch("This account must scan from its registered device", employee_id=employee_id)

        if not profile.device_id:
            return device_id

        if not hmac.compare_digest(profile.device_id, device_id):
            logger.warning("device mismatch for employee %s", employee_id)
            raise DeviceMismatch("This device is not registered for this account", employee_id=employee_id)
        return None

    def bind(self, employee_id: str, device_id: str) -> None:
        self._employees.bind_device(employee_id, device_id)
        logger.info("bound device for employee %s", employee_id)


class EmployeeService:
    """Use case: manage employees (admin / HR)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    @staticmethod
    def _require_manager(session: SessionContext) -> None:
        if not can_view(session, Screen.EMPLOYEES.value):
            raise AuthorizationError("You do not have permission to manage employees")

    @staticmethod
    def _clean_permissions(permissions: Optional[Sequence[str]]) -> tuple[str, ...]:
        cleaned = []
        for p in permissions or ():
            p = (p or "").strip()
            if p not in _KNOWN_SCREENS:
                raise ValidationError(f"Unknown screen key {p!r}")
            if p not in cleaned:
                cleaned.append(p)
        return tuple(cleaned)

    @staticmethod
    def _parse_contract(value: str) -> ContractType:
        try:
            return ContractType(value)
        except ValueError:
            raise ValidationError("Invalid contract type")

    def list_all(self, session: SessionContext) -> Sequence[EmployeeProfile]:
        self._require_manager(session)
        return self._employees.list_all()

    def get(self, session: SessionContext, employee_id: str) -> EmployeeProfile:
        if session.identity != employee_id:
            self._require_manager(session)
        profile = self._employees.get_by_id(employee_id)
        if not profile:
            raise ValidationError("Employee does not exist")
        return profile

    def create(
        self,
        session: SessionContext,
        *,
        login_id: str,
        full_name: str,
        password: str,
        contract_type: str = ContractType.FULL_TIME.value,
        custom_check_in_time: Optional[str] = None,
        custom_check_out_time: Optional[str] = None,
        hire_date: Optional[date] = None,
        base_salary: float = 0.0,
        device_verification_enabled: bool = False,
        permissions: Optional[Sequence[str]] = None,
        is_hr: bool = False,
    ) -> EmployeeProfile:
        self._require_manager(session)

        login_id = require_non_empty(login_id, "Login id")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._employees.get_by_login_id(login_id):
            raise ValidationError("Login id already exists")
        if is_hr and not session.is_admin:
            raise AuthorizationError("Only an admin can grant HR access")

        profile = EmployeeProfile(
            employee_id=uuid.uuid4().hex,
            login_id=login_id,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            contract_type=self._parse_contract(contract_type),
            custom_check_in_time=parse_hhmm(custom_check_in_time) if custom_check_in_time else None,
            custom_check_out_time=parse_hhmm(custom_check_out_time) if custom_check_out_time else None,
            hire_date=hire_date or date.today(),
            base_salary=require_non_negative_amount(base_salary, "Base salary"),
            device_verification_enabled=bool(device_verification_enabled),
            permissions=self._clean_permissions(permissions),
            is_hr=bool(is_hr),
        )
        self._employees.create(profile)
        logger.info("employee %s created by %s", profile.employee_id, session.identity)
        return profile

    def update(self, session: SessionContext, employee_id: str, **changes) -> EmployeeProfile:
        self._require_manager(session)
        profile = self._employees.get_by_id(employee_id)
        if not profile:
            raise ValidationError("Employee does not exist")

        fields: dict = {}
        if "full_name" in changes:
            fields["full_name"] = require_non_empty(changes["full_name"], "Full name")
        if "password" in changes and changes["password"]:
            require_min_length(changes["password"], "Password", MIN_PASSWORD_LENGTH)
            fields["password_hash"] = generate_password_hash(changes["password"])
        if "contract_type" in changes:
            fields["contract_type"] = self._parse_contract(changes["contract_type"])
        for key in ("custom_check_in_time", "custom_check_out_time"):
            if key in changes:
                fields[key] = parse_hhmm(changes[key]) if changes[key] else None
        if "status" in changes:
            try:
                fields["status"] = EmployeeStatus(changes["status"])
            except ValueError:
                raise ValidationError("Invalid employee status")
        if "base_salary" in changes:
            fields["base_salary"] = require_non_negative_amount(changes["base_salary"], "Base salary")
        if "device_verification_enabled" in changes:
            fields["device_verification_enabled"] = bool(changes["device_verification_enabled"])
        if "permissions" in changes:
            fields["permissions"] = self._clean_permissions(changes["permissions"])
        if "is_hr" in changes:
            if not session.is_admin:
                raise AuthorizationError("Only an admin can grant HR access")
            fields["is_hr"] = bool(changes["is_hr"])

        unknown = set(changes) - set(fields) - {"password"}
        if unknown:
            raise ValidationError(f"Unsupported fields: {', '.join(sorted(unknown))}")

        updated = replace(profile, **fields)
        if not self._employees.update(updated):
            raise ValidationError("Updating employee failed")
        return updated

    def deactivate(self, session: SessionContext, employee_id: str) -> None:
        self._require_manager(session)
        if employee_id == session.identity:
            raise ValidationError("You cannot deactivate your own account")
        profile = self._employees.get_by_id(employee_id)
        if not profile:
            raise ValidationError("Employee does not exist")
        if profile.is_admin:
            raise ValidationError("Admin accounts cannot be deactivated")
        self._employees.update(replace(profile, status=EmployeeStatus.INACTIVE))
        logger.info("employee %s deactivated by %s", employee_id, session.identity)

    def reset_device(self, session: SessionContext, employee_id: str) -> None:
        self._require_manager(session)
        if not self._employees.bind_device(employee_id, None):
            raise ValidationError("Employee does not exist")
