from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AlertSeverity, RiskLevel, RiskReason, SessionStatus


@dataclass(frozen=True)
class GeoLoginEvent:
    """Where and when a login happened, as resolved from the client IP."""

    country: Optional[str]
    city: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    timestamp: datetime
    region: Optional[str] = None
    isp: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        # 0.0 is treated as "unknown", the geo lookup's placeholder value.
        return bool(self.latitude) and bool(self.longitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "country": self.country,
            "city": self.city,
            "region": self.region,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "isp": self.isp,
        }


@dataclass(frozen=True)
class RiskAssessment:
    level: RiskLevel = RiskLevel.LOW
    reason: RiskReason = RiskReason.NONE

    @property
    def is_high(self) -> bool:
        return self.level == RiskLevel.HIGH


@dataclass(frozen=True)
class AuthSession:
    session_id: int
    user_id: int
    login_at: datetime
    status: SessionStatus
    ip_address: Optional[str] = None
    device_info: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isp: Optional[str] = None
    risk_level: RiskLevel = RiskLevel.LOW
    logout_at: Optional[datetime] = None

    def as_geo_event(self) -> GeoLoginEvent:
        return GeoLoginEvent(
            country=self.country,
            city=self.city,
            latitude=self.latitude,
            longitude=self.longitude,
            timestamp=self.login_at,
            region=self.region,
            isp=self.isp,
        )


@dataclass(frozen=True)
class SecurityAlert:
    session_id: Optional[int]
    user_id: int
    alert_type: str
    severity: AlertSeverity
    metadata: dict[str, Any] = field(default_factory=dict)
