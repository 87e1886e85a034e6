from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: str,
        outlet_id: Optional[int] = None,
        check_in: Optional[datetime] = None,
        check_out: Optional[datetime] = None,
        overridden_by: Optional[int] = None,
        override_reason: Optional[str] = None,
        overridden_at: Optional[datetime] = None,
    ) -> int:
        raise NotImplementedError

    def update_check_out(self, *, attendance_id: int, check_out: datetime) -> bool:
        raise NotImplementedError

    def apply_override(
        self,
        *,
        attendance_id: int,
        status: str,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        overridden_by: int,
        override_reason: str,
        overridden_at: datetime,
    ) -> bool:
        """Super Admin correction of an existing record."""

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
