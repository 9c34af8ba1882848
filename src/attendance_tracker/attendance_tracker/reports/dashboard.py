from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..academics.repository import AcademicRepository
from ..attendance.repository import AttendanceRepository
from ..core.constants import DASHBOARD_UPCOMING_LIMIT
from ..scope.resolver import ScopeResolver
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from ..stats.calculator import StatusCounts, format_percent
from ..stats.service import AttendanceStatsService
from ..users.repository import FacultyRepository
from .formatting import session_ref


def _chronological(sessions) -> list[Session]:
    return sorted(sessions, key=lambda s: (s.date, s.start_time, s.session_id))


class DashboardService:
    """Landing-page counters for both roles, evaluated against an explicit ``now``."""

    def __init__(
        self,
        scope: ScopeResolver,
        stats: AttendanceStatsService,
        academics: AcademicRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        faculty: FacultyRepository,
    ):
        self._scope = scope
        self._stats = stats
        self._academics = academics
        self._sessions = sessions
        self._attendance = attendance
        self._faculty = faculty

    def faculty_dashboard(self, *, faculty_id: int, now: datetime) -> dict:
        edges = self._academics.teaching_edges(faculty_id=int(faculty_id))
        groups = {e.group_id for e in edges}
        memberships = self._academics.memberships(group_ids=groups) if groups else []

        roster_size: dict[int, int] = {}
        for m in memberships:
            roster_size[m.group_id] = roster_size.get(m.group_id, 0) + 1

        today = self._sessions.find(faculty_id=int(faculty_id), on_date=now.date())
        past = [s for s in self._sessions.find(faculty_id=int(faculty_id)) if s.starts_at < now]

        recorded: dict[int, int] = {}
        for r in self._attendance.list_for_sessions([s.session_id for s in past]):
            recorded[r.session_id] = recorded.get(r.session_id, 0) + 1
        # A past session is pending until every roster member has a row.
        pending = [s for s in past if recorded.get(s.session_id, 0) < roster_size.get(s.group_id, 0)]

        return {
            "courses": len(edges),
            "students": len(memberships),
            "today_sessions": len(today),
            "pending_tasks": len(pending),
        }

    def student_dashboard(self, *, student_id: int, now: datetime, limit: Optional[int] = None) -> dict:
        limit = DASHBOARD_UPCOMING_LIMIT if limit is None else int(limit)
        groups = self._scope.groups_for_student(student_id)
        if groups:
            edges = self._academics.teaching_edges(group_ids=groups)
            sessions = self._sessions.find(group_ids=groups)
        else:
            edges, sessions = [], []

        upcoming = _chronological(s for s in sessions if s.starts_at >= now)[:limit]
        past = [s for s in sessions if s.starts_at < now]
        records = self._attendance.list_for_sessions([s.session_id for s in past], student_id=int(student_id))
        counts = StatusCounts.tally(r.status for r in records)
        rate = self._stats.rate(counts, len(past), empty_rate=self._stats.student_empty_rate)

        courses = {c.course_id: c for c in self._academics.list_courses(s.course_id for s in upcoming)}
        today = []
        for s in upcoming:
            if s.date != now.date():
                continue
            course = courses.get(s.course_id)
            faculty = self._faculty.get_by_id(s.faculty_id)
            today.append(
                {
                    **session_ref(s),
                    "course": course.name if course else None,
                    "faculty": faculty.name if faculty else None,
                }
            )

        return {
            "courses": len(edges),
            "upcoming_sessions": len(upcoming),
            "attendance_rate": format_percent(rate),
            "missed_sessions": counts.absent,
            "today_sessions": today,
        }
