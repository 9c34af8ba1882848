from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.constants import DEFAULT_CLOSE_GRACE_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES
from ..core.enums import AttendanceStatus, SelfMarkWindow
from ..core.exceptions import SessionEndedError, SessionNotStartedError
from ..sessions.model import Session


@dataclass(frozen=True)
class WindowBounds:
    starts_at: datetime
    late_after: datetime
    closes_after: datetime


@dataclass(frozen=True)
class SelfMarkPolicy:
    """Time gate for student self-marking.

    ``[start, start + late]`` marks present, ``(start + late, end + close]``
    marks late; outside that range marking is refused. Nothing is stored:
    the window is recomputed from the schedule on every call.
    """

    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES
    close_grace_minutes: int = DEFAULT_CLOSE_GRACE_MINUTES

    def bounds(self, session: Session) -> WindowBounds:
        starts_at = session.starts_at
        return WindowBounds(
            starts_at=starts_at,
            late_after=starts_at + timedelta(minutes=self.late_threshold_minutes),
            closes_after=session.ends_at + timedelta(minutes=self.close_grace_minutes),
        )

    def window_at(self, session: Session, now: datetime) -> SelfMarkWindow:
        b = self.bounds(session)
        if now < b.starts_at:
            return SelfMarkWindow.NOT_YET_OPEN
        if now <= b.late_after:
            return SelfMarkWindow.OPEN_PRESENT_WINDOW
        if now <= b.closes_after:
            return SelfMarkWindow.OPEN_LATE_WINDOW
        return SelfMarkWindow.CLOSED

    def decide(self, session: Session, now: datetime) -> AttendanceStatus:
        window = self.window_at(session, now)
        if window == SelfMarkWindow.NOT_YET_OPEN:
            raise SessionNotStartedError("Session has not started yet")
        if window == SelfMarkWindow.CLOSED:
            raise SessionEndedError("Session has ended, can no longer mark attendance")
        if window == SelfMarkWindow.OPEN_PRESENT_WINDOW:
            return AttendanceStatus.PRESENT
        return AttendanceStatus.LATE
