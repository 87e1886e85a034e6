"""Login risk scoring from geolocation continuity.

Pure functions: the caller fetches the previous session and resolves the
current location.
"""

from __future__ import annotations

import math
from typing import Optional

from ..core.constants import EARTH_RADIUS_KM, IMPOSSIBLE_TRAVEL_SPEED_KMH
from ..core.enums import RiskLevel, RiskReason
from .model import GeoLoginEvent, RiskAssessment


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points given in decimal degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def travel_speed_kmh(previous: GeoLoginEvent, current: GeoLoginEvent) -> Optional[float]:
    """Implied speed between two logins; None without coordinates or elapsed time."""
    if not (previous.has_coordinates and current.has_coordinates):
        return None

    hours = (current.timestamp - previous.timestamp).total_seconds() / 3600
    if hours <= 0:
        return None

    distance = haversine_km(previous.latitude, previous.longitude, current.latitude, current.longitude)
    return distance / hours


def assess_login_risk(previous: Optional[GeoLoginEvent], current: GeoLoginEvent) -> RiskAssessment:
    if previous is None:
        return RiskAssessment()

    # A country change wins even when the travel check would also fire.
    if previous.country != current.country:
        return RiskAssessment(RiskLevel.HIGH, RiskReason.NEW_COUNTRY)

    speed = travel_speed_kmh(previous, current)
    if speed is not None and speed > IMPOSSIBLE_TRAVEL_SPEED_KMH:
        return RiskAssessment(RiskLevel.HIGH, RiskReason.IMPOSSIBLE_TRAVEL)

    return RiskAssessment()
