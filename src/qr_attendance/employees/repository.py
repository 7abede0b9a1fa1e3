from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def get_by_login_id(self, login_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[EmployeeProfile]:
        raise NotImplementedError

    def create(self, profile: EmployeeProfile) -> str:
        raise NotImplementedError

    def update(self, profile: EmployeeProfile) -> bool:
        raise NotImplementedError

    def bind_device(self, employee_id: str, device_id: Optional[str]) -> bool:
        """Set (or clear with ``None``) the bound device."""

        raise NotImplementedError
