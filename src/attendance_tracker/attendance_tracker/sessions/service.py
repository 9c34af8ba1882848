from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..academics.repository import AcademicRepository
from ..attendance.model import AttendanceView, index_by_student, view_of
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_clock, parse_iso_date
from ..common.validators import require_positive_int
from ..core.exceptions import ValidationError
from ..scope.resolver import ScopeResolver
from .model import Session, sort_newest_first
from .repository import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSchedule:
    session_date: date
    start_time: str
    end_time: str
    topic: Optional[str]


def _validate_schedule(session_date, start_time: str, end_time: str, topic: Optional[str]) -> SessionSchedule:
    if not isinstance(session_date, date):
        session_date = parse_iso_date(str(session_date or ""))
    start = parse_clock(start_time)
    end = parse_clock(end_time)
    if end <= start:
        raise ValidationError("End time must be after start time")
    return SessionSchedule(
        session_date=session_date,
        start_time=start.strftime("%H:%M"),
        end_time=end.strftime("%H:%M"),
        topic=(topic or "").strip() or None,
    )


class SessionService:
    """Faculty-side session lifecycle plus the session lists both roles see."""

    def __init__(
        self,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        academics: AcademicRepository,
        scope: ScopeResolver,
    ):
        self._sessions = sessions
        self._attendance = attendance
        self._academics = academics
        self._scope = scope

    def create_session(
        self,
        *,
        faculty_id: int,
        course_id: int,
        group_id: int,
        session_date,
        start_time: str,
        end_time: str,
        topic: Optional[str] = None,
    ) -> Session:
        course_id = require_positive_int(course_id, "course_id")
        group_id = require_positive_int(group_id, "group_id")
        schedule = _validate_schedule(session_date, start_time, end_time, topic)

        self._scope.assert_faculty_teaches(faculty_id, course_id, group_id)

        session_id = self._sessions.create(
            course_id=course_id,
            faculty_id=int(faculty_id),
            group_id=group_id,
            session_date=schedule.session_date,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            topic=schedule.topic,
        )
        logger.info(
            "Created session %s course=%s group=%s on %s %s-%s",
            session_id,
            course_id,
            group_id,
            schedule.session_date.isoformat(),
            schedule.start_time,
            schedule.end_time,
        )
        return Session(
            session_id=session_id,
            course_id=course_id,
            faculty_id=int(faculty_id),
            group_id=group_id,
            date=schedule.session_date,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            topic=schedule.topic,
        )

    def update_session(
        self,
        *,
        faculty_id: int,
        session_id: int,
        session_date=None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        topic: Optional[str] = None,
    ) -> Session:
        """Reschedule or retitle a session; omitted fields keep their value."""

        current = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        schedule = _validate_schedule(
            session_date if session_date is not None else current.date,
            start_time if start_time is not None else current.start_time,
            end_time if end_time is not None else current.end_time,
            topic if topic is not None else current.topic,
        )

        # MySQL reports 0 affected rows for a no-op update; ownership was checked above.
        self._sessions.update(
            session_id=current.session_id,
            session_date=schedule.session_date,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            topic=schedule.topic,
        )
        logger.info("Updated session %s", current.session_id)
        return Session(
            session_id=current.session_id,
            course_id=current.course_id,
            faculty_id=current.faculty_id,
            group_id=current.group_id,
            date=schedule.session_date,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            topic=schedule.topic,
        )

    def delete_session_cascade(self, *, faculty_id: int, session_id: int) -> int:
        """Remove a session and all of its attendance rows as one unit."""

        session = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        removed = self._sessions.delete_with_attendance(session.session_id)
        logger.info("Deleted session %s with %s attendance record(s)", session.session_id, removed)
        return removed

    def get_for_faculty(self, *, faculty_id: int, session_id: int) -> Session:
        return self._scope.assert_faculty_owns_session(faculty_id, session_id)

    def list_for_faculty(self, *, faculty_id: int) -> list[Session]:
        return sort_newest_first(self._sessions.find(faculty_id=int(faculty_id)))

    def session_attendance(self, *, faculty_id: int, session_id: int) -> list[tuple[int, AttendanceView]]:
        """Roster of the session's group with each member's view (``Unmarked`` when no row)."""

        session = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        roster = [m.student_id for m in self._academics.memberships(group_ids=[session.group_id])]
        by_student = index_by_student(self._attendance.list_for_sessions([session.session_id]))
        return [(student_id, view_of(by_student.get(student_id))) for student_id in roster]

    def list_for_student(self, *, student_id: int) -> list[tuple[Session, AttendanceView]]:
        groups = self._scope.groups_for_student(student_id)
        sessions = sort_newest_first(self._sessions.find(group_ids=groups)) if groups else []
        records = self._attendance.list_for_sessions([s.session_id for s in sessions], student_id=int(student_id))
        by_session = {r.session_id: r for r in records}
        return [(s, view_of(by_session.get(s.session_id))) for s in sessions]

