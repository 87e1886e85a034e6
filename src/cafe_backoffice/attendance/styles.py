from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus

_BACKGROUND = {
    AttendanceStatus.PRESENT: "bg-green-600",
    AttendanceStatus.ABSENT: "bg-red-600",
    AttendanceStatus.HALF_DAY: "bg-yellow-600",
    AttendanceStatus.LEAVE: "bg-blue-600",
    AttendanceStatus.UNPAID_LEAVE: "bg-red-800",
}

_TEXT = {
    AttendanceStatus.PRESENT: "text-green-700",
    AttendanceStatus.ABSENT: "text-red-700",
    AttendanceStatus.HALF_DAY: "text-yellow-700",
    AttendanceStatus.LEAVE: "text-blue-700",
    AttendanceStatus.UNPAID_LEAVE: "text-red-900",
}


def get_attendance_status_color(status: Optional[str]) -> str:
    return _BACKGROUND.get(AttendanceStatus.parse(status), "bg-gray-400")


def get_attendance_status_text_color(status: Optional[str]) -> str:
    return _TEXT.get(AttendanceStatus.parse(status), "text-gray-700")
