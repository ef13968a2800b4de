from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Portal role of a signed-in user."""

    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Status stored per (student, date, period)."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    ONDUTY = "onduty"


class GroupBy(str, Enum):
    SUBJECT = "subject"
    NONE = "none"


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
