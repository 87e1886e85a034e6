"""Module-level payroll functions backed by the standard calculator."""

from __future__ import annotations

from ..attendance.model import MonthlyAttendanceSummary
from ..core.constants import DEFAULT_LATE_PENALTY_RATE
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBreakdown, PayrollInput

_default_calculator = StandardPayrollCalculator()


def calculate_overtime_pay(hours: float, rate: float) -> float:
    return _default_calculator.overtime_pay(hours, rate)


def calculate_late_penalty(minutes: float, rate_per_minute: float = 0) -> float:
    return _default_calculator.late_penalty(minutes, rate_per_minute)


def calculate_unpaid_leave_deduction(base_salary: float, total_working_days: int, unpaid_days: float) -> float:
    return _default_calculator.unpaid_leave_deduction(base_salary, total_working_days, unpaid_days)


def generate_payroll_breakdown(data: PayrollInput) -> PayrollBreakdown:
    return _default_calculator.breakdown(data)


def build_payroll_input(
    summary: MonthlyAttendanceSummary,
    *,
    working_days: int,
    base_salary: float,
    overtime_rate: float,
    late_penalty_rate: float = DEFAULT_LATE_PENALTY_RATE,
    incentives: float = 0,
    bonus: float = 0,
    allowances: float = 0,
    advances: float = 0,
    other_deductions: float = 0,
) -> PayrollInput:
    """Map a monthly attendance summary onto payroll parameters.

    Absent and "Unpaid Leave" days are both billed as unpaid leave days.
    """
    return PayrollInput(
        base_salary=base_salary or 0,
        total_working_days=working_days,
        present_days=summary.present_days,
        leave_days=summary.leave_days,
        half_days=summary.half_days,
        overtime_hours=summary.overtime_hours,
        overtime_rate=overtime_rate or 0,
        incentives=incentives,
        bonus=bonus,
        allowances=allowances,
        advances=advances,
        other_deductions=other_deductions,
        late_minutes=summary.late_minutes,
        late_penalty_rate=late_penalty_rate,
        unpaid_leave_days=summary.absent_days + summary.unpaid_leave_days,
    )
