from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


# DECIMAL columns (money, hours, coordinates) come back as Decimal.
def as_float(value: Union[Decimal, float, int, None], default: float = 0.0) -> float:
    return float(value) if value is not None else default


def as_optional_float(value: Union[Decimal, float, int, None]) -> Optional[float]:
    return float(value) if value is not None else None
