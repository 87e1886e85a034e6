from __future__ import annotations

from dataclasses import fields
from datetime import date
from typing import Any, Optional

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchone
from .model import PayrollBreakdown, PayrollRecord
from .repository import PayrollRepository

_BREAKDOWN_COLUMNS = [f.name for f in fields(PayrollBreakdown)]
_DAY_COLUMNS = {"total_working_days", "present_days", "leave_days", "half_days"}
_SELECT = (
    "SELECT id, employee_id, outlet_id, month, payment_status, is_locked, generated_by, generated_at, "
    + ", ".join(_BREAKDOWN_COLUMNS)
    + " FROM payroll"
)


def _to_record(r: dict[str, Any]) -> PayrollRecord:
    breakdown = PayrollBreakdown(
        **{name: int(r[name] or 0) if name in _DAY_COLUMNS else as_float(r[name]) for name in _BREAKDOWN_COLUMNS}
    )
    return PayrollRecord(
        payroll_id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        outlet_id=r.get("outlet_id"),
        month=r["month"],
        breakdown=breakdown,
        payment_status=PaymentStatus(r.get("payment_status") or PaymentStatus.PENDING.value),
        is_locked=bool(r.get("is_locked")),
        generated_by=r.get("generated_by"),
        generated_at=r.get("generated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_month(self, employee_id: int, month: date) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND month=%s", (int(employee_id), month))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(
        self,
        *,
        employee_id: int,
        outlet_id: Optional[int],
        month: date,
        breakdown: PayrollBreakdown,
        generated_by: int,
    ) -> Optional[int]:
        values = breakdown.to_record()
        columns = ["employee_id", "outlet_id", "month", "generated_by", "payment_status", *_BREAKDOWN_COLUMNS]
        params = [
            int(employee_id),
            outlet_id,
            month,
            int(generated_by),
            PaymentStatus.PENDING.value,
            *[values[name] for name in _BREAKDOWN_COLUMNS],
        ]
        # A locked row keeps every column; the caller sees None.
        updates = ", ".join(
            f"{c}=IF(is_locked, {c}, VALUES({c}))" for c in ["outlet_id", "generated_by", *_BREAKDOWN_COLUMNS]
        )

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO payroll({", ".join(columns)})
                VALUES({", ".join(["%s"] * len(columns))})
                ON DUPLICATE KEY UPDATE id=LAST_INSERT_ID(id),
                    generated_at=IF(is_locked, generated_at, CURRENT_TIMESTAMP), {updates}
                """,
                tuple(params),
            )
            payroll_id = int(cur.lastrowid)
            cur.execute("SELECT is_locked FROM payroll WHERE id=%s", (payroll_id,))
            r = fetchone(cur)
            return None if r and r["is_locked"] else payroll_id

    def set_locked(self, payroll_id: int, *, locked: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE payroll SET is_locked=%s WHERE id=%s", (1 if locked else 0, int(payroll_id)))
            return cur.rowcount > 0
