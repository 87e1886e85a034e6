from __future__ import annotations

from dataclasses import fields

from ...common.money import round_money
from ...common.validators import require_non_negative
from ..model import PayrollBreakdown, PayrollInput
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base + overtime + add-ons, minus penalties and flat deductions, not below 0.

    ``strict=True`` rejects negative numeric inputs with ValidationError;
    the default trusts upstream validation and computes whatever it is given.
    """

    def __init__(self, *, strict: bool = False):
        self._strict = bool(strict)

    def _check(self, **values: float) -> None:
        if not self._strict:
            return
        for name, value in values.items():
            require_non_negative(value, name)

    def overtime_pay(self, hours: float, rate: float) -> float:
        self._check(overtime_hours=hours, overtime_rate=rate)
        return round_money(hours * rate)

    def late_penalty(self, minutes: float, rate_per_minute: float = 0) -> float:
        self._check(late_minutes=minutes, late_penalty_rate=rate_per_minute or 0)
        if not rate_per_minute:
            return 0.0
        return round_money(minutes * rate_per_minute)

    def unpaid_leave_deduction(self, base_salary: float, total_working_days: int, unpaid_days: float) -> float:
        self._check(base_salary=base_salary, total_working_days=total_working_days, unpaid_leave_days=unpaid_days)
        if total_working_days == 0 or unpaid_days == 0:
            return 0.0
        per_day = base_salary / total_working_days
        return round_money(per_day * unpaid_days)

    def breakdown(self, data: PayrollInput) -> PayrollBreakdown:
        if self._strict:
            self._check(**{f.name: getattr(data, f.name) or 0 for f in fields(data)})

        overtime_amount = self.overtime_pay(data.overtime_hours, data.overtime_rate)
        late_penalty = self.late_penalty(data.late_minutes or 0, data.late_penalty_rate or 0)
        unpaid_leave = self.unpaid_leave_deduction(
            data.base_salary,
            data.total_working_days,
            data.unpaid_leave_days or 0,
        )

        base_salary = round_money(data.base_salary or 0)
        incentives = round_money(data.incentives or 0)
        bonus = round_money(data.bonus or 0)
        allowances = round_money(data.allowances or 0)
        advances = round_money(data.advances or 0)
        other_deductions = round_money(data.other_deductions or 0)

        gross_pay = base_salary + overtime_amount + incentives + bonus + allowances
        total_deductions = late_penalty + unpaid_leave + advances + other_deductions
        net_pay = max(0, gross_pay - total_deductions)

        return PayrollBreakdown(
            base_salary=base_salary,
            overtime_amount=overtime_amount,
            incentives=incentives,
            bonus=bonus,
            allowances=allowances,
            gross_pay=round_money(gross_pay),
            late_penalty=late_penalty,
            unpaid_leave_deduction=unpaid_leave,
            advances=advances,
            other_deductions=other_deductions,
            total_deductions=round_money(total_deductions),
            net_pay=round_money(net_pay),
            total_working_days=data.total_working_days,
            present_days=data.present_days,
            leave_days=data.leave_days,
            half_days=data.half_days,
            overtime_hours=data.overtime_hours,
        )
