from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import AttendanceRecord, AttendanceView, view_of
from ..sessions.model import Session
from .calculator import StatusCounts, format_percent


@dataclass(frozen=True)
class SessionStats:
    session_id: int
    total: int
    counts: StatusCounts
    unmarked: int
    rate: int

    @property
    def present(self) -> int:
        return self.counts.present

    @property
    def absent(self) -> int:
        return self.counts.absent

    @property
    def late(self) -> int:
        return self.counts.late

    def to_dict(self) -> dict:
        return {
            "total_students": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "unmarked": self.unmarked,
            "attendance_rate": format_percent(self.rate),
        }


@dataclass(frozen=True)
class SessionLine:
    session: Session
    view: AttendanceView


@dataclass(frozen=True)
class StudentCourseStats:
    """One student's attendance in one course, session by session."""

    student_id: int
    course_id: int
    lines: list[SessionLine]
    counts: StatusCounts
    total_sessions: int
    unmarked: int
    per_student_rate: int

    def summary_dict(self) -> dict:
        return {
            "total_sessions": self.total_sessions,
            "present": self.counts.present,
            "absent": self.counts.absent,
            "late": self.counts.late,
            "unmarked": self.unmarked,
            "attendance_percentage": format_percent(self.per_student_rate),
        }


@dataclass(frozen=True)
class CourseAggregate:
    """Whole roster x all sessions of one (course, group).

    ``aggregate_fill_rate`` divides by ``sessions * students`` (every mark that
    could exist), unlike the per-student rate which divides by sessions.
    """

    course_id: int
    group_id: int
    sessions: int
    students: int
    counts: StatusCounts
    aggregate_fill_rate: int

    @property
    def total_possible(self) -> int:
        return self.sessions * self.students

    def to_dict(self) -> dict:
        return {
            "sessions": self.sessions,
            "students": self.students,
            "present": self.counts.present,
            "absent": self.counts.absent,
            "late": self.counts.late,
            "unmarked": self.counts.unmarked_of(self.total_possible),
            "attendance_rate": format_percent(self.aggregate_fill_rate),
        }


@dataclass
class CourseMatrix:
    """Raw inputs for course-level stats: sessions x roster plus the stored cells."""

    course_id: int
    group_id: int
    sessions: list[Session]
    roster: list[int]
    cells: dict[tuple[int, int], AttendanceRecord] = field(default_factory=dict)

    def view(self, session_id: int, student_id: int) -> AttendanceView:
        return view_of(self.cells.get((session_id, student_id)))

    def record(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        return self.cells.get((session_id, student_id))


@dataclass(frozen=True)
class CourseOverview:
    """Per-course totals on a student's "my attendance" page."""

    course_id: int
    faculty_id: int
    sessions: int
    counts: StatusCounts
    unmarked: int
    rate: int
