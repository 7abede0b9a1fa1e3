from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import Role, Screen
from .model import EmployeeProfile

HR_SCREENS = frozenset(
    {
        Screen.DASHBOARD.value,
        Screen.EMPLOYEES.value,
        Screen.ATTENDANCE.value,
        Screen.ATTENDANCE_QR.value,
        Screen.PAYROLL.value,
        Screen.REPORTS.value,
        Screen.SCAN.value,
    }
)

# Every logged-in employee may scan and see their own dashboard.
BASE_SCREENS = frozenset({Screen.DASHBOARD.value, Screen.SCAN.value})


@dataclass(frozen=True)
class SessionContext:
    """Who is acting, built once at login and dropped at logout."""

    identity: str
    display_name: str
    roles: frozenset[Role] = field(default_factory=frozenset)
    permissions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def for_employee(cls, profile: EmployeeProfile) -> "SessionContext":
        roles = {Role.EMPLOYEE}
        if profile.is_hr:
            roles.add(Role.HR)
        if profile.is_admin:
            roles.update({Role.ADMIN, Role.HR})
        return cls(
            identity=profile.employee_id,
            display_name=profile.full_name,
            roles=frozenset(roles),
            permissions=frozenset(profile.permissions),
        )

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @property
    def is_hr(self) -> bool:
        return Role.HR in self.roles

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "display_name": self.display_name,
            "roles": sorted(r.value for r in self.roles),
            "permissions": sorted(self.permissions),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["SessionContext"]:
        if not data or not data.get("identity"):
            return None
        return cls(
            identity=str(data["identity"]),
            display_name=str(data.get("display_name") or ""),
            roles=frozenset(Role(r) for r in data.get("roles") or ()),
            permissions=frozenset(data.get("permissions") or ()),
        )


def can_view(session: Optional[SessionContext], screen_key: str) -> bool:
    """Single capability check used by every screen/endpoint."""
    if session is None:
        return False
    if session.is_admin:
        return True
    if session.is_hr and screen_key in HR_SCREENS:
        return True
    return screen_key in BASE_SCREENS or screen_key in session.permissions
