from __future__ import annotations

from enum import Enum
from typing import Optional


def normalize_token(value: Optional[str]) -> str:
    """Lowercase and drop every whitespace character ("Half  Day" -> "halfday")."""
    return "".join((value or "").lower().split())


class Role(str, Enum):
    """Employee roles used for permission checks."""

    SUPER_ADMIN = "Super Admin"
    ADMIN = "Admin"
    MANAGER = "Manager"
    STAFF = "Staff"

    @classmethod
    def is_super_admin(cls, value: Optional[str]) -> bool:
        # "Super Admin" and "super_admin" are both stored in the wild.
        normalized = (value or "").strip().lower()
        return normalized in {"super admin", "super_admin"}


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored in the attendance table."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"
    HALF_DAY = "Half Day"
    UNPAID_LEAVE = "Unpaid Leave"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AttendanceStatus"]:
        """Case and whitespace insensitive lookup; None for unknown strings."""
        if isinstance(value, cls):
            return value
        return _STATUS_BY_TOKEN.get(normalize_token(value))


_STATUS_BY_TOKEN = {normalize_token(s.value): s for s in AttendanceStatus}


class RiskLevel(str, Enum):
    LOW = "low"
    HIGH = "high"


class RiskReason(str, Enum):
    NONE = "none"
    NEW_COUNTRY = "new_country"
    IMPOSSIBLE_TRAVEL = "impossible_travel"


class AlertSeverity(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    LOGGED_OUT = "logged_out"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"


class AuditAction(str, Enum):
    ATTENDANCE_CREATE = "attendance_create"
    ATTENDANCE_EDIT = "attendance_edit"
    ATTENDANCE_DELETE = "attendance_delete"
    PAYROLL_GENERATE = "payroll_generate"
    PAYROLL_EDIT = "payroll_edit"
    PAYROLL_LOCK = "payroll_lock"
    PAYROLL_UNLOCK = "payroll_unlock"
    FORCE_LOGOUT = "FORCE_LOGOUT"


class AuditEntityType(str, Enum):
    ATTENDANCE = "attendance"
    PAYROLL = "payroll"
    AUTH_SESSION = "auth_sessions"
