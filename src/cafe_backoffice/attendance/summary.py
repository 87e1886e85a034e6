from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Sequence, Union

from ..common.datetime_utils import DateLike, days_in_month, iter_month_days, js_weekday
from ..core.constants import DEFAULT_EXCLUDED_WEEKDAYS
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, MonthlyAttendanceSummary

RecordLike = Union[AttendanceRecord, Mapping[str, Any]]

_COUNTER_BY_STATUS = {
    AttendanceStatus.PRESENT: "present_days",
    AttendanceStatus.ABSENT: "absent_days",
    AttendanceStatus.LEAVE: "leave_days",
    AttendanceStatus.HALF_DAY: "half_days",
    AttendanceStatus.UNPAID_LEAVE: "unpaid_leave_days",
}


def _field(record: RecordLike, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def get_monthly_attendance_summary(records: Iterable[RecordLike], month: DateLike) -> MonthlyAttendanceSummary:
    """Fold daily records into per-status counts and overtime/lateness totals.

    ``total_days`` is the length of ``month``, not the number of records.
    Records whose status matches none of the known statuses are not counted.
    """
    counts = {name: 0 for name in _COUNTER_BY_STATUS.values()}
    overtime_hours = 0
    late_minutes = 0

    for record in records:
        status = AttendanceStatus.parse(_field(record, "status"))
        if status is not None:
            counts[_COUNTER_BY_STATUS[status]] += 1

        overtime_hours += _field(record, "overtime_hours") or 0
        late_minutes += _field(record, "late_minutes") or 0

    return MonthlyAttendanceSummary(
        total_days=days_in_month(month),
        overtime_hours=overtime_hours,
        late_minutes=late_minutes,
        **counts,
    )


def get_working_days_in_month(month: DateLike, exclude_weekdays: Sequence[int] = DEFAULT_EXCLUDED_WEEKDAYS) -> int:
    """Count the days of ``month`` whose weekday (0=Sunday .. 6=Saturday) is not excluded."""
    excluded = set(exclude_weekdays)
    return sum(1 for day in iter_month_days(month) if js_weekday(day) not in excluded)
