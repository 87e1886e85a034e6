from __future__ import annotations

import ipaddress
from datetime import datetime
from typing import Mapping, Optional

from .model import GeoLoginEvent

# Set by the reverse proxy / CDN edge that performs the geo-IP lookup.
GEO_HEADERS = {
    "country": "X-Geo-Country",
    "city": "X-Geo-City",
    "region": "X-Geo-Region",
    "latitude": "X-Geo-Latitude",
    "longitude": "X-Geo-Longitude",
    "isp": "X-Geo-ISP",
}


def client_ip(headers: Mapping[str, str], remote_addr: Optional[str]) -> str:
    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return remote_addr or "127.0.0.1"


def is_internal_ip(ip: str) -> bool:
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return addr.is_loopback or addr.is_private


def _float_or_none(value: Optional[str]) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def resolve_geo(headers: Mapping[str, str], ip: str, *, default: Mapping, now: datetime) -> GeoLoginEvent:
    """Build the login's geo event from proxy headers.

    Internal addresses, and requests the proxy did not annotate, get ``default``.
    """
    country = headers.get(GEO_HEADERS["country"])
    if is_internal_ip(ip) or not country:
        return GeoLoginEvent(
            country=default.get("country"),
            city=default.get("city"),
            region=default.get("region"),
            latitude=default.get("latitude"),
            longitude=default.get("longitude"),
            isp=default.get("isp"),
            timestamp=now,
        )

    return GeoLoginEvent(
        country=country,
        city=headers.get(GEO_HEADERS["city"]),
        region=headers.get(GEO_HEADERS["region"]),
        latitude=_float_or_none(headers.get(GEO_HEADERS["latitude"])),
        longitude=_float_or_none(headers.get(GEO_HEADERS["longitude"])),
        isp=headers.get(GEO_HEADERS["isp"]),
        timestamp=now,
    )
