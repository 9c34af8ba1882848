from __future__ import annotations

from typing import Iterable, Optional

from ..academics.repository import AcademicRepository
from ..attendance.model import AttendanceRecord, Recorded, index_by_cell, index_by_student, view_of
from ..attendance.repository import AttendanceRepository
from ..common.concurrency import run_concurrently
from ..core.constants import FACULTY_EMPTY_RATE, STUDENT_DASHBOARD_EMPTY_RATE
from ..core.exceptions import NotFoundError
from ..sessions.model import Session, sort_newest_first
from ..sessions.repository import SessionRepository
from .calculator import RateCalculator, StatusCounts, WeightedRateCalculator
from .model import (
    CourseAggregate,
    CourseMatrix,
    CourseOverview,
    SessionLine,
    SessionStats,
    StudentCourseStats,
)


class AttendanceStatsService:
    """Derives counts and rates from roster edges and raw attendance rows.

    Callers are expected to have passed the relevant ``ScopeResolver`` check;
    nothing here filters by principal.
    """

    def __init__(
        self,
        academics: AcademicRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[RateCalculator] = None,
        faculty_empty_rate: int = FACULTY_EMPTY_RATE,
        student_empty_rate: int = STUDENT_DASHBOARD_EMPTY_RATE,
        parallel_reads: bool = True,
    ):
        self._academics = academics
        self._sessions = sessions
        self._attendance = attendance
        self._calculator = calculator or WeightedRateCalculator()
        self.faculty_empty_rate = int(faculty_empty_rate)
        self.student_empty_rate = int(student_empty_rate)
        self._parallel = bool(parallel_reads)

    def rate(self, counts: StatusCounts, total: int, *, empty_rate: Optional[int] = None) -> int:
        if empty_rate is None:
            empty_rate = self.faculty_empty_rate
        return self._calculator.rate(counts, total, empty_rate=empty_rate)

    def roster(self, group_id: int) -> list[int]:
        return [m.student_id for m in self._academics.memberships(group_ids=[int(group_id)])]

    # ---- session level ----

    def session_breakdown(self, session: Session) -> tuple[SessionStats, list[tuple[int, AttendanceRecord | None]]]:
        """Stats plus one ``(student_id, record-or-None)`` row per roster member."""

        roster, records = run_concurrently(
            lambda: self.roster(session.group_id),
            lambda: self._attendance.list_for_sessions([session.session_id]),
            parallel=self._parallel,
        )
        by_student = index_by_student(records)
        rows = [(student_id, by_student.get(student_id)) for student_id in roster]
        return self._session_stats(session.session_id, rows), rows

    def compute_session_stats(self, session_id: int) -> SessionStats:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        stats, _ = self.session_breakdown(session)
        return stats

    def _session_stats(self, session_id: int, rows: list[tuple[int, AttendanceRecord | None]]) -> SessionStats:
        # Rows of students who have since left the group are ignored, so the
        # four counts always add up to the roster size.
        counts = StatusCounts.tally(r.status for _, r in rows if r is not None)
        total = len(rows)
        return SessionStats(
            session_id=int(session_id),
            total=total,
            counts=counts,
            unmarked=counts.unmarked_of(total),
            rate=self.rate(counts, total),
        )

    # ---- one student, one course ----

    def compute_course_stats_for_student(
        self,
        student_id: int,
        course_id: int,
        group_ids: Iterable[int],
        *,
        faculty_id: Optional[int] = None,
        empty_rate: Optional[int] = None,
    ) -> StudentCourseStats:
        sessions = sort_newest_first(
            self._sessions.find(faculty_id=faculty_id, course_id=int(course_id), group_ids=list(group_ids))
        )
        records = self._attendance.list_for_sessions([s.session_id for s in sessions], student_id=int(student_id))
        by_session = {r.session_id: r for r in records}

        lines = [SessionLine(session=s, view=view_of(by_session.get(s.session_id))) for s in sessions]
        counts = StatusCounts.tally(r.status for r in by_session.values())
        total = len(sessions)
        return StudentCourseStats(
            student_id=int(student_id),
            course_id=int(course_id),
            lines=lines,
            counts=counts,
            total_sessions=total,
            unmarked=counts.unmarked_of(total),
            per_student_rate=self.rate(counts, total, empty_rate=empty_rate),
        )

    # ---- whole course x group ----

    def course_matrix(self, course_id: int, group_id: int, *, faculty_id: Optional[int] = None) -> CourseMatrix:
        sessions, roster = run_concurrently(
            lambda: sort_newest_first(
                self._sessions.find(faculty_id=faculty_id, course_id=int(course_id), group_ids=[int(group_id)])
            ),
            lambda: self.roster(group_id),
            parallel=self._parallel,
        )
        records = self._attendance.list_for_sessions([s.session_id for s in sessions])
        members = set(roster)
        cells = index_by_cell(r for r in records if r.student_id in members)
        return CourseMatrix(course_id=int(course_id), group_id=int(group_id), sessions=sessions, roster=roster, cells=cells)

    def aggregate_of(self, matrix: CourseMatrix) -> CourseAggregate:
        counts = StatusCounts.tally(r.status for r in matrix.cells.values())
        sessions, students = len(matrix.sessions), len(matrix.roster)
        return CourseAggregate(
            course_id=matrix.course_id,
            group_id=matrix.group_id,
            sessions=sessions,
            students=students,
            counts=counts,
            aggregate_fill_rate=self.rate(counts, sessions * students),
        )

    def compute_course_stats_aggregate(
        self,
        course_id: int,
        group_id: int,
        *,
        faculty_id: Optional[int] = None,
    ) -> CourseAggregate:
        return self.aggregate_of(self.course_matrix(course_id, group_id, faculty_id=faculty_id))

    def per_session_stats(self, matrix: CourseMatrix) -> list[SessionStats]:
        return [
            self._session_stats(s.session_id, [(sid, matrix.record(s.session_id, sid)) for sid in matrix.roster])
            for s in matrix.sessions
        ]

    def per_student_stats(self, matrix: CourseMatrix) -> list[StudentCourseStats]:
        out: list[StudentCourseStats] = []
        total = len(matrix.sessions)
        for student_id in matrix.roster:
            lines = [SessionLine(session=s, view=matrix.view(s.session_id, student_id)) for s in matrix.sessions]
            counts = StatusCounts.tally(line.view.status for line in lines if isinstance(line.view, Recorded))
            out.append(
                StudentCourseStats(
                    student_id=student_id,
                    course_id=matrix.course_id,
                    lines=lines,
                    counts=counts,
                    total_sessions=total,
                    unmarked=counts.unmarked_of(total),
                    per_student_rate=self.rate(counts, total),
                )
            )
        return out

    # ---- student-wide ----

    def student_overview(self, student_id: int, group_ids: Iterable[int]) -> list[CourseOverview]:
        """Per-course totals over every session of the student's groups."""

        sessions = sort_newest_first(self._sessions.find(group_ids=list(group_ids)))
        records = self._attendance.list_for_sessions([s.session_id for s in sessions], student_id=int(student_id))
        by_session = {r.session_id: r for r in records}

        per_course: dict[int, list[Session]] = {}
        for s in sessions:
            per_course.setdefault(s.course_id, []).append(s)

        out: list[CourseOverview] = []
        for course_id, course_sessions in per_course.items():
            counts = StatusCounts.tally(
                by_session[s.session_id].status for s in course_sessions if s.session_id in by_session
            )
            total = len(course_sessions)
            out.append(
                CourseOverview(
                    course_id=course_id,
                    faculty_id=course_sessions[0].faculty_id,
                    sessions=total,
                    counts=counts,
                    unmarked=counts.unmarked_of(total),
                    rate=self.rate(counts, total),
                )
            )
        return out
