"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_KM = 6371.0
# Roughly the cruising speed of a commercial jet.
IMPOSSIBLE_TRAVEL_SPEED_KMH = 900.0

DEFAULT_LATE_PENALTY_RATE = 0.5
MIN_REASON_LENGTH = 5

# Weekday indices: 0=Sunday .. 6=Saturday
SUNDAY = 0
DEFAULT_EXCLUDED_WEEKDAYS = (SUNDAY,)

DEFAULT_AUDIT_TRAIL_LIMIT = 50
DEFAULT_RECENT_AUDIT_LIMIT = 100
DEFAULT_INTERNAL_EMAIL_DOMAIN = "caferepublic.internal"
DEFAULT_SESSION_DAYS = 7
