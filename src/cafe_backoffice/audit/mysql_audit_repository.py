from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditLog, AuditLogEntry
from .repository import AuditRepository

_SELECT = """
    SELECT a.id, a.action, a.entity_type, a.entity_id, a.timestamp, a.performed_by,
           e.name AS performed_by_name, a.old_value, a.new_value, a.reason, a.outlet_id
    FROM audit_logs a
    LEFT JOIN employees e ON e.id = a.performed_by
"""


def _dump(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, default=str)


def _load(value: Any) -> Any:
    if value is None or not isinstance(value, (str, bytes)):
        return value
    return json.loads(value)


def _to_log(r: dict[str, Any]) -> AuditLog:
    return AuditLog(
        log_id=int(r["id"]),
        action=r["action"],
        entity_type=r["entity_type"],
        entity_id=str(r["entity_id"]),
        timestamp=r["timestamp"],
        performed_by=r.get("performed_by"),
        performed_by_name=r.get("performed_by_name"),
        old_value=_load(r.get("old_value")),
        new_value=_load(r.get("new_value")),
        reason=r.get("reason"),
        outlet_id=r.get("outlet_id"),
    )


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, entry: AuditLogEntry) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(
                    action, entity_type, entity_id, old_value, new_value, reason, performed_by, outlet_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.action.value,
                    entry.entity_type.value,
                    str(entry.entity_id),
                    _dump(entry.old_value),
                    _dump(entry.new_value),
                    entry.reason,
                    entry.performed_by,
                    entry.outlet_id,
                ),
            )
            return int(cur.lastrowid)

    def list_for_entity(self, *, entity_type: str, entity_id: str, limit: int) -> Sequence[AuditLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.entity_type=%s AND a.entity_id=%s ORDER BY a.timestamp DESC LIMIT %s",
                (entity_type, str(entity_id), int(limit)),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_recent(self, *, outlet_id: int, limit: int, action: Optional[str] = None) -> Sequence[AuditLog]:
        clauses = ["a.outlet_id=%s"]
        params: list[object] = [int(outlet_id)]
        if action:
            clauses.append("a.action=%s")
            params.append(action)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY a.timestamp DESC LIMIT %s",
                tuple(params),
            )
            return [_to_log(r) for r in fetchall(cur)]
