from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    HOD = "hod"
    TEACHER = "teacher"
    STUDENT = "student"


class SessionState(str, Enum):
    """Where a session sits relative to the current time."""

    ACTIVE = "active"
    UPCOMING = "upcoming"
    PAST = "past"


class MarkedBy(str, Enum):
    """Provenance of an attendance write."""

    SELF = "self"
    TEACHER = "teacher"
