from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role names as stored in the login session."""

    FACULTY = "faculty"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Statuses that can be persisted on an attendance row."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class SelfMarkWindow(str, Enum):
    """Where ``now`` falls relative to a session's schedule."""

    NOT_YET_OPEN = "NOT_YET_OPEN"
    OPEN_PRESENT_WINDOW = "OPEN_PRESENT_WINDOW"
    OPEN_LATE_WINDOW = "OPEN_LATE_WINDOW"
    CLOSED = "CLOSED"
