from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..attendance.model import MonthlyAttendanceSummary
from ..attendance.repository import AttendanceRepository
from ..attendance.summary import get_monthly_attendance_summary, get_working_days_in_month
from ..audit.service import AuditLogger
from ..common.datetime_utils import DateLike, month_bounds
from ..core.constants import DEFAULT_LATE_PENALTY_RATE
from ..core.enums import AuditAction
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Employee, SessionUser
from ..users.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .engine import build_payroll_input
from .model import PayrollBreakdown
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

LOCKED_PAYROLL_MESSAGE = "Payroll for this month is locked"


@dataclass(frozen=True)
class PayrollAdjustments:
    """Flat add-ons and deductions entered by hand for one payroll run."""

    incentives: float = 0
    bonus: float = 0
    allowances: float = 0
    advances: float = 0
    other_deductions: float = 0


@dataclass(frozen=True)
class PayrollPreview:
    employee_id: int
    summary: MonthlyAttendanceSummary
    working_days: int
    breakdown: PayrollBreakdown


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        audit: AuditLogger,
        *,
        calculator: Optional[PayrollCalculator] = None,
        late_penalty_rate: float = DEFAULT_LATE_PENALTY_RATE,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._employees = employees
        self._audit = audit
        self._calculator = calculator or StandardPayrollCalculator()
        self._late_penalty_rate = late_penalty_rate

    def _get_payable_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        if not employee.base_salary or employee.base_salary <= 0:
            raise ValidationError("Employee must have a valid base salary configured")
        return employee

    def preview(
        self,
        employee_id: int,
        month: DateLike,
        adjustments: Optional[PayrollAdjustments] = None,
    ) -> PayrollPreview:
        employee = self._get_payable_employee(employee_id)
        adjustments = adjustments or PayrollAdjustments()

        start, end = month_bounds(month)
        records = self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)
        summary = get_monthly_attendance_summary(records, month)
        working_days = get_working_days_in_month(month)

        data = build_payroll_input(
            summary,
            working_days=working_days,
            base_salary=employee.base_salary,
            overtime_rate=employee.overtime_rate,
            late_penalty_rate=self._late_penalty_rate,
            incentives=adjustments.incentives,
            bonus=adjustments.bonus,
            allowances=adjustments.allowances,
            advances=adjustments.advances,
            other_deductions=adjustments.other_deductions,
        )
        return PayrollPreview(
            employee_id=employee_id,
            summary=summary,
            working_days=working_days,
            breakdown=self._calculator.breakdown(data),
        )

    def generate(
        self,
        *,
        actor: SessionUser,
        employee_id: int,
        month: DateLike,
        outlet_id: Optional[int] = None,
        adjustments: Optional[PayrollAdjustments] = None,
    ) -> int:
        start, _ = month_bounds(month)
        existing = self._payroll.get_for_employee_and_month(employee_id, start)
        if existing and existing.is_locked:
            raise ValidationError(LOCKED_PAYROLL_MESSAGE)

        result = self.preview(employee_id, start, adjustments)
        payroll_id = self._payroll.upsert(
            employee_id=employee_id,
            outlet_id=outlet_id or actor.outlet_id,
            month=start,
            breakdown=result.breakdown,
            generated_by=actor.employee_id,
        )
        if payroll_id is None:
            # Locked after the check above.
            raise ValidationError(LOCKED_PAYROLL_MESSAGE)
        logger.info(
            "Payroll %s generated for employee %s (%s): net_pay=%s",
            payroll_id,
            employee_id,
            start.strftime("%Y-%m"),
            result.breakdown.net_pay,
        )

        self._audit.log_payroll_action(
            action=AuditAction.PAYROLL_GENERATE,
            payroll_id=payroll_id,
            performed_by=actor.employee_id,
            old_value=existing.breakdown.to_record() if existing else None,
            new_value=result.breakdown.to_record(),
            outlet_id=outlet_id or actor.outlet_id,
        )
        return payroll_id

    def set_locked(self, *, actor: SessionUser, payroll_id: int, locked: bool, reason: Optional[str] = None) -> None:
        if not actor.is_super_admin:
            raise AuthorizationError("Only Super Admin can lock or unlock payroll")

        record = self._payroll.get_by_id(payroll_id)
        if not record:
            raise NotFoundError("Payroll record not found")
        if record.is_locked == locked:
            return

        if not self._payroll.set_locked(payroll_id, locked=locked):
            raise ValidationError("Failed to update payroll")

        self._audit.log_payroll_action(
            action=AuditAction.PAYROLL_LOCK if locked else AuditAction.PAYROLL_UNLOCK,
            payroll_id=payroll_id,
            performed_by=actor.employee_id,
            old_value={"is_locked": record.is_locked},
            new_value={"is_locked": locked},
            reason=reason,
            outlet_id=record.outlet_id,
        )
