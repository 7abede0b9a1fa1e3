from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRow


class PayrollRepository(Protocol):
    def list_for_month(
        self,
        *,
        year: int,
        month: int,
        status: Optional[PayrollStatus] = None,
    ) -> Sequence[PayrollRow]:
        raise NotImplementedError
