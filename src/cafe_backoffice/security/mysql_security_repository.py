from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from ..core.enums import RiskLevel, SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_float, db_cursor, fetchone
from .model import AuthSession, GeoLoginEvent, SecurityAlert
from .repository import AlertRepository, SessionRepository

_SESSION_COLUMNS = """
    id, user_id, login_at, status, ip_address, device_info, country, region, city,
    latitude, longitude, isp, risk_level, logout_at
"""


def _to_session(r: dict[str, Any]) -> AuthSession:
    return AuthSession(
        session_id=int(r["id"]),
        user_id=int(r["user_id"]),
        login_at=r["login_at"],
        status=SessionStatus(r.get("status") or SessionStatus.ACTIVE.value),
        ip_address=r.get("ip_address"),
        device_info=r.get("device_info"),
        country=r.get("country"),
        region=r.get("region"),
        city=r.get("city"),
        latitude=as_optional_float(r.get("latitude")),
        longitude=as_optional_float(r.get("longitude")),
        isp=r.get("isp"),
        risk_level=RiskLevel(r.get("risk_level") or RiskLevel.LOW.value),
        logout_at=r.get("logout_at"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[AuthSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM auth_sessions WHERE id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_latest_for_user(self, user_id: int) -> Optional[AuthSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM auth_sessions
                WHERE user_id=%s
                ORDER BY login_at DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        geo: GeoLoginEvent,
        ip_address: str,
        device_info: str,
        risk_level: RiskLevel,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO auth_sessions(
                    user_id, ip_address, device_info, status, login_at,
                    country, region, city, latitude, longitude, isp, risk_level
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    ip_address,
                    device_info,
                    SessionStatus.ACTIVE.value,
                    geo.timestamp,
                    geo.country,
                    geo.region,
                    geo.city,
                    geo.latitude,
                    geo.longitude,
                    geo.isp,
                    risk_level.value,
                ),
            )
            return int(cur.lastrowid)

    def mark_logged_out(self, session_id: int, *, logout_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE auth_sessions SET status=%s, logout_at=%s WHERE id=%s",
                (SessionStatus.LOGGED_OUT.value, logout_at, int(session_id)),
            )
            return cur.rowcount > 0


class MySQLAlertRepository(AlertRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, alert: SecurityAlert) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO security_alerts(session_id, user_id, alert_type, severity, metadata)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    alert.session_id,
                    int(alert.user_id),
                    alert.alert_type,
                    alert.severity.value,
                    json.dumps(alert.metadata, default=str),
                ),
            )
            return int(cur.lastrowid)
