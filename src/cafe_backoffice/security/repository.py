from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import RiskLevel
from .model import AuthSession, GeoLoginEvent, SecurityAlert


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AuthSession]:
        raise NotImplementedError

    def get_latest_for_user(self, user_id: int) -> Optional[AuthSession]:
        """Most recent session by login time, or None for a first login."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        geo: GeoLoginEvent,
        ip_address: str,
        device_info: str,
        risk_level: RiskLevel,
    ) -> int:
        raise NotImplementedError

    def mark_logged_out(self, session_id: int, *, logout_at: datetime) -> bool:
        raise NotImplementedError


class AlertRepository(Protocol):
    def insert(self, alert: SecurityAlert) -> int:
        raise NotImplementedError
