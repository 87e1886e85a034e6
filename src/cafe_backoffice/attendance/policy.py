from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import DateLike, as_day, today
from ..core.constants import MIN_REASON_LENGTH
from ..core.enums import AttendanceStatus, Role
from .model import EditValidation, PermissionDecision

FUTURE_DATE_REASON = "Attendance cannot be marked beyond today"
LOCKED_REASON = "This attendance record is locked"
EDIT_ROLE_REASON = "Only Super Admin can override attendance"
DELETE_ROLE_REASON = "Only Super Admin can delete attendance"
FUTURE_DATE_ERROR = "Cannot mark attendance for future dates"
REASON_ERROR = f"A valid reason (min {MIN_REASON_LENGTH} chars) is required"


def is_date_in_future(value: DateLike, *, now: Optional[datetime] = None) -> bool:
    """True when the calendar day of ``value`` is after today; time of day is ignored."""
    return as_day(value) > today(now)


def can_edit_attendance(
    role: Optional[str],
    value: DateLike,
    is_locked: bool = False,
    *,
    now: Optional[datetime] = None,
) -> PermissionDecision:
    if is_date_in_future(value, now=now):
        return PermissionDecision(False, FUTURE_DATE_REASON)
    if is_locked:
        return PermissionDecision(False, LOCKED_REASON)
    if not Role.is_super_admin(role):
        return PermissionDecision(False, EDIT_ROLE_REASON)
    return PermissionDecision(True)


def can_delete_attendance(role: Optional[str], is_locked: bool = False) -> PermissionDecision:
    if is_locked:
        return PermissionDecision(False, LOCKED_REASON)
    if not Role.is_super_admin(role):
        return PermissionDecision(False, DELETE_ROLE_REASON)
    return PermissionDecision(True)


def validate_attendance_edit(
    value: DateLike,
    status: Optional[AttendanceStatus | str],
    reason: Optional[str],
    *,
    now: Optional[datetime] = None,
) -> EditValidation:
    """Collect every violation instead of stopping at the first one."""
    errors: list[str] = []

    if is_date_in_future(value, now=now):
        errors.append(FUTURE_DATE_ERROR)

    if not reason or len(reason.strip()) < MIN_REASON_LENGTH:
        errors.append(REASON_ERROR)

    return EditValidation(errors=errors)
