from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class PayrollInput:
    """Salary parameters plus attendance aggregates for one employee and one period."""

    base_salary: float
    total_working_days: int
    present_days: int
    leave_days: int
    half_days: int
    overtime_hours: float
    overtime_rate: float
    incentives: float = 0
    bonus: float = 0
    allowances: float = 0
    advances: float = 0
    other_deductions: float = 0
    late_minutes: int = 0
    late_penalty_rate: float = 0
    unpaid_leave_days: int = 0


@dataclass(frozen=True)
class PayrollBreakdown:
    # Earnings
    base_salary: float
    overtime_amount: float
    incentives: float
    bonus: float
    allowances: float
    gross_pay: float

    # Deductions
    late_penalty: float
    unpaid_leave_deduction: float
    advances: float
    other_deductions: float
    total_deductions: float

    net_pay: float

    # Summary
    total_working_days: int
    present_days: int
    leave_days: int
    half_days: int
    overtime_hours: float

    def to_record(self) -> dict:
        """Column/value mapping of the payroll table."""
        return asdict(self)


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    outlet_id: Optional[int]
    month: date
    breakdown: PayrollBreakdown
    payment_status: PaymentStatus = PaymentStatus.PENDING
    is_locked: bool = False
    generated_by: Optional[int] = None
    generated_at: Optional[datetime] = None
