from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

DateLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> date:
    """Parse YYYY-MM (or YYYY-MM-DD) into the first day of that month."""
    value = (value or "").strip()
    fmt = "%Y-%m-%d" if len(value) > 7 else "%Y-%m"
    return datetime.strptime(value, fmt).date().replace(day=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_day(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def today(now: Optional[datetime] = None) -> date:
    return as_day(now or now_local())


def days_in_month(month: DateLike) -> int:
    return calendar.monthrange(month.year, month.month)[1]


def month_bounds(month: DateLike) -> tuple[date, date]:
    first = date(month.year, month.month, 1)
    return first, first.replace(day=days_in_month(month))


def iter_month_days(month: DateLike) -> Iterator[date]:
    first, last = month_bounds(month)
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)


def js_weekday(value: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6."""
    return (value.weekday() + 1) % 7
