import math
from datetime import datetime, timedelta

import pytest

from cafe_backoffice.core.constants import IMPOSSIBLE_TRAVEL_SPEED_KMH
from cafe_backoffice.core.enums import RiskLevel, RiskReason
from cafe_backoffice.security import risk
from cafe_backoffice.security.model import GeoLoginEvent, RiskAssessment
from cafe_backoffice.security.risk import assess_login_risk, haversine_km, travel_speed_kmh

T0 = datetime(2026, 3, 15, 9, 0)


def _event(country="India", lat=28.6139, lon=77.2090, at=T0, city="Delhi"):
    return GeoLoginEvent(country=country, city=city, latitude=lat, longitude=lon, timestamp=at)


def test_haversine_one_degree_on_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(6371 * math.pi / 180)


def test_haversine_same_point_is_zero():
    assert haversine_km(19.076, 72.8777, 19.076, 72.8777) == 0


def test_haversine_delhi_mumbai():
    assert haversine_km(28.6139, 77.2090, 19.0760, 72.8777) == pytest.approx(1150, abs=10)


def test_first_login_is_low_risk():
    assert assess_login_risk(None, _event()) == RiskAssessment(RiskLevel.LOW, RiskReason.NONE)


def test_country_change_is_high_risk():
    result = assess_login_risk(_event(), _event(country="Singapore", lat=1.35, lon=103.82, at=T0 + timedelta(days=3)))

    assert result.level is RiskLevel.HIGH
    assert result.reason is RiskReason.NEW_COUNTRY


def test_country_change_wins_over_impossible_travel():
    current = _event(country="United States", lat=40.71, lon=-74.0, at=T0 + timedelta(minutes=30))

    assert assess_login_risk(_event(), current).reason is RiskReason.NEW_COUNTRY


def test_impossible_travel_within_country():
    current = _event(lat=19.0760, lon=72.8777, city="Mumbai", at=T0 + timedelta(hours=1))

    result = assess_login_risk(_event(), current)

    assert result.is_high
    assert result.reason is RiskReason.IMPOSSIBLE_TRAVEL


def test_plausible_travel_is_low_risk():
    current = _event(lat=19.0760, lon=72.8777, city="Mumbai", at=T0 + timedelta(hours=2))

    assert assess_login_risk(_event(), current) == RiskAssessment()


@pytest.mark.parametrize("delta", [timedelta(0), timedelta(hours=-1)])
def test_no_elapsed_time_is_low_risk(delta):
    current = _event(lat=19.0760, lon=72.8777, at=T0 + delta)

    assert assess_login_risk(_event(), current).level is RiskLevel.LOW


@pytest.mark.parametrize(
    "lat, lon",
    [(None, None), (0, 72.8777), (19.0760, 0), (None, 72.8777)],
)
def test_missing_coordinates_skip_travel_check(lat, lon):
    current = _event(lat=lat, lon=lon, at=T0 + timedelta(minutes=5))

    assert assess_login_risk(_event(), current).level is RiskLevel.LOW
    assert travel_speed_kmh(_event(), current) is None


def test_both_countries_unknown_count_as_same():
    previous = _event(country=None, lat=None, lon=None)
    current = _event(country=None, lat=None, lon=None, at=T0 + timedelta(hours=1))

    assert assess_login_risk(previous, current).level is RiskLevel.LOW


def test_travel_speed():
    current = _event(lat=28.6139, lon=78.2090, at=T0 + timedelta(hours=2))

    speed = travel_speed_kmh(_event(), current)

    assert speed == pytest.approx(haversine_km(28.6139, 77.2090, 28.6139, 78.2090) / 2)


def test_same_place_later_is_low_risk():
    assert assess_login_risk(_event(), _event(at=T0 + timedelta(hours=3))) == RiskAssessment()


def _mumbai_after(hours):
    return _event(lat=19.0760, lon=72.8777, city="Mumbai", at=T0 + timedelta(hours=hours))


def test_threshold_is_strictly_greater_than():
    distance = haversine_km(28.6139, 77.2090, 19.0760, 72.8777)
    at_threshold = distance / IMPOSSIBLE_TRAVEL_SPEED_KMH

    assert assess_login_risk(_event(), _mumbai_after(at_threshold + 1 / 3600)).level is RiskLevel.LOW
    assert assess_login_risk(_event(), _mumbai_after(at_threshold - 1 / 3600)).reason is RiskReason.IMPOSSIBLE_TRAVEL


def test_speed_equal_to_threshold_stays_low(monkeypatch):
    current = _mumbai_after(1.5)
    speed = travel_speed_kmh(_event(), current)

    monkeypatch.setattr(risk, "IMPOSSIBLE_TRAVEL_SPEED_KMH", speed)
    assert assess_login_risk(_event(), current).level is RiskLevel.LOW

    monkeypatch.setattr(risk, "IMPOSSIBLE_TRAVEL_SPEED_KMH", speed - 0.001)
    assert assess_login_risk(_event(), current).is_high
