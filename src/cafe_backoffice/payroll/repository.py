from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import PayrollBreakdown, PayrollRecord


class PayrollRepository(Protocol):
    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_employee_and_month(self, employee_id: int, month: date) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        employee_id: int,
        outlet_id: Optional[int],
        month: date,
        breakdown: PayrollBreakdown,
        generated_by: int,
    ) -> Optional[int]:
        """Insert or replace the payroll row keyed by (employee_id, month).

        Returns None, leaving the row untouched, when that row is locked.
        """

        raise NotImplementedError

    def set_locked(self, payroll_id: int, *, locked: bool) -> bool:
        raise NotImplementedError
