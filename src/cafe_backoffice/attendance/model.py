from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    ``status`` keeps the raw stored string so that unknown values survive
    a round trip; ``AttendanceStatus.parse`` maps it onto the enum.
    """

    attendance_id: int
    employee_id: int
    date: date
    status: str
    overtime_hours: float = 0
    late_minutes: int = 0
    outlet_id: Optional[int] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    is_locked: bool = False
    overridden_by: Optional[int] = None
    override_reason: Optional[str] = None
    overridden_at: Optional[datetime] = None

    def snapshot(self) -> dict:
        """Audit-friendly view of the mutable fields."""
        return {
            "status": self.status,
            "check_in": self.check_in.isoformat() if self.check_in else None,
            "check_out": self.check_out.isoformat() if self.check_out else None,
        }


@dataclass(frozen=True)
class MonthlyAttendanceSummary:
    total_days: int
    present_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    half_days: int = 0
    unpaid_leave_days: int = 0
    overtime_hours: float = 0
    late_minutes: int = 0


@dataclass(frozen=True)
class PermissionDecision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class EditValidation:
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors
