from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollInput


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def overtime_pay(self, hours: float, rate: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def late_penalty(self, minutes: float, rate_per_minute: float = 0) -> float:
        raise NotImplementedError

    @abstractmethod
    def unpaid_leave_deduction(self, base_salary: float, total_working_days: int, unpaid_days: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def breakdown(self, data: PayrollInput) -> PayrollBreakdown:
        raise NotImplementedError
