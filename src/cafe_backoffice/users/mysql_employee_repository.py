from __future__ import annotations

from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, name, email, role, password_hash, outlet_id, base_salary, overtime_rate, is_active"


def _to_employee(row: dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["id"]),
        name=row["name"],
        email=row.get("email"),
        role=row.get("role") or "",
        password_hash=row.get("password_hash") or "",
        outlet_id=row.get("outlet_id"),
        base_salary=as_float(row.get("base_salary")),
        overtime_rate=as_float(row.get("overtime_rate")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE LOWER(email)=LOWER(%s)", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_super_admins(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE role IN ('Super Admin', 'super_admin') AND is_active=1"
            )
            return [_to_employee(r) for r in fetchall(cur)]
