from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..audit.service import AuditLogger
from ..common.datetime_utils import DateLike, month_bounds, now_local
from ..common.validators import require_min_length
from ..core.constants import MIN_REASON_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import SessionUser
from .model import AttendanceRecord, MonthlyAttendanceSummary
from .policy import can_delete_attendance, can_edit_attendance, validate_attendance_edit
from .repository import AttendanceRepository
from .summary import get_monthly_attendance_summary

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, audit: AuditLogger):
        self._attendance = attendance
        self._audit = audit

    def punch_in(self, employee_id: int, *, outlet_id: Optional[int] = None, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ValidationError("You have already punched in today")

        return self._attendance.create(
            employee_id=employee_id,
            work_date=today,
            status=AttendanceStatus.PRESENT.value,
            outlet_id=outlet_id,
            check_in=now,
        )

    def punch_out(self, employee_id: int, *, now: Optional[datetime] = None) -> None:
        now = now or now_local()

        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if not record:
            raise ValidationError("You have not punched in today")
        if record.check_out is not None:
            raise ValidationError("You have already punched out today")
        if record.is_locked:
            raise ValidationError("This attendance record is locked")

        self._attendance.update_check_out(attendance_id=record.attendance_id, check_out=now)

    def monthly_summary(self, employee_id: int, month: DateLike) -> MonthlyAttendanceSummary:
        start, end = month_bounds(month)
        records = self._attendance.list_for_employee(employee_id, start_date=start, end_date=end)
        return get_monthly_attendance_summary(records, month)

    def save_override(
        self,
        *,
        actor: SessionUser,
        employee_id: int,
        work_date: date,
        status: str,
        reason: str,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        outlet_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Create or correct one day's attendance on behalf of an employee.

        Returns the attendance id. Only Super Admin may do this, never for a
        future day and never on a locked record.
        """
        now = now or now_local()
        existing = self._attendance.get_for_employee_and_date(employee_id, work_date)

        decision = can_edit_attendance(actor.role, work_date, bool(existing and existing.is_locked), now=now)
        if not decision:
            raise AuthorizationError(decision.reason)

        validation = validate_attendance_edit(work_date, status, reason, now=now)
        if not validation.valid:
            raise ValidationError(", ".join(validation.errors))

        parsed = AttendanceStatus.parse(status)
        if parsed is None:
            raise ValidationError(f"Unknown attendance status: {status!r}")
        if check_in and check_out and check_out < check_in:
            raise ValidationError("Check-out must be after check-in")

        reason = reason.strip()
        if existing is None:
            attendance_id = self._attendance.create(
                employee_id=employee_id,
                work_date=work_date,
                status=parsed.value,
                outlet_id=outlet_id,
                check_in=check_in,
                check_out=check_out,
                overridden_by=actor.employee_id,
                override_reason=reason,
                overridden_at=now,
            )
            logger.info("Attendance %s created by %s for employee %s", attendance_id, actor.employee_id, employee_id)
            return attendance_id

        updated = self._attendance.apply_override(
            attendance_id=existing.attendance_id,
            status=parsed.value,
            check_in=check_in,
            check_out=check_out,
            overridden_by=actor.employee_id,
            override_reason=reason,
            overridden_at=now,
        )
        if not updated:
            raise ValidationError("Failed to update attendance")

        new_value = {
            "status": parsed.value,
            "check_in": check_in.isoformat() if check_in else None,
            "check_out": check_out.isoformat() if check_out else None,
        }
        self._audit.log_attendance_edit(
            attendance_id=existing.attendance_id,
            old_value=existing.snapshot(),
            new_value=new_value,
            reason=reason,
            performed_by=actor.employee_id,
            outlet_id=outlet_id or existing.outlet_id,
        )
        return existing.attendance_id

    def delete_record(self, *, actor: SessionUser, attendance_id: int, reason: str) -> None:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")

        decision = can_delete_attendance(actor.role, record.is_locked)
        if not decision:
            raise AuthorizationError(decision.reason)

        reason = require_min_length(reason, "Deletion reason", MIN_REASON_LENGTH)

        # Logged before the row disappears so the old values are still known.
        self._audit.log_attendance_delete(
            attendance_id=record.attendance_id,
            attendance_data=_record_payload(record),
            reason=reason,
            performed_by=actor.employee_id,
            outlet_id=record.outlet_id,
        )

        if not self._attendance.delete(attendance_id):
            raise ValidationError("Failed to delete attendance")


def _record_payload(record: AttendanceRecord) -> dict:
    payload = record.snapshot()
    payload.update(
        {
            "id": record.attendance_id,
            "employee_id": record.employee_id,
            "date": record.date.isoformat(),
            "overtime_hours": record.overtime_hours,
            "late_minutes": record.late_minutes,
        }
    )
    return payload
