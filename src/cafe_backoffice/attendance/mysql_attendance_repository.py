from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    id, employee_id, outlet_id, date, status, check_in, check_out,
    overtime_hours, late_minutes, is_locked, overridden_by, override_reason, overridden_at
"""


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        outlet_id=r.get("outlet_id"),
        date=r["date"],
        status=r.get("status") or "",
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        overtime_hours=as_float(r.get("overtime_hours")),
        late_minutes=int(r.get("late_minutes") or 0),
        is_locked=bool(r.get("is_locked")),
        overridden_by=r.get("overridden_by"),
        override_reason=r.get("override_reason"),
        overridden_at=r.get("overridden_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND date=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    employee_id, outlet_id, date, status, check_in, check_out,
                    overridden_by, override_reason, overridden_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    outlet_id,
                    work_date,
                    status,
                    check_in,
                    check_out,
                    overridden_by,
                    override_reason,
                    overridden_at,
                ),
            )
            return int(cur.lastrowid)

    def update_check_out(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s WHERE id=%s AND is_locked=0",
                (check_out, int(attendance_id)),
            )
            return cur.rowcount > 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET status=%s, check_in=%s, check_out=%s,
                    overridden_by=%s, override_reason=%s, overridden_at=%s
                WHERE id=%s AND is_locked=0
                """,
                (status, check_in, check_out, overridden_by, override_reason, overridden_at, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s AND is_locked=0", (int(attendance_id),))
            return cur.rowcount > 0
