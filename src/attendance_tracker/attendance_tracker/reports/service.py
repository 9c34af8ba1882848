from __future__ import annotations

import logging
from typing import Optional

from ..academics.repository import AcademicRepository
from ..attendance.model import view_of
from ..core.exceptions import ForbiddenError, NotFoundError
from ..core.principal import FacultyPrincipal, Principal
from ..scope.resolver import ScopeResolver
from ..stats.calculator import format_percent
from ..stats.service import AttendanceStatsService
from ..users.repository import FacultyRepository, StudentRepository
from .csv_export import course_report_csv, csv_filename
from .formatting import course_ref, faculty_ref, group_ref, session_ref, student_ref
from .model import CourseReport

logger = logging.getLogger(__name__)


class ReportService:
    """Read-only reports. Every entry point runs its scope check first."""

    def __init__(
        self,
        scope: ScopeResolver,
        stats: AttendanceStatsService,
        academics: AcademicRepository,
        faculty: FacultyRepository,
        students: StudentRepository,
    ):
        self._scope = scope
        self._stats = stats
        self._academics = academics
        self._faculty = faculty
        self._students = students

    # ---- faculty: course ----

    def course_report(self, *, faculty_id: int, course_id: int, group_id: Optional[int] = None) -> CourseReport:
        """Course x group report over the faculty's own sessions.

        Without ``group_id`` the first group the faculty teaches the course to is used.
        """

        if group_id is None:
            edges = self._academics.teaching_edges(faculty_id=int(faculty_id), course_id=int(course_id))
            if not edges:
                raise ForbiddenError("You do not have access to this course or group")
            edge = edges[0]
        else:
            edge = self._scope.assert_faculty_teaches(faculty_id, course_id, group_id)

        course = self._academics.get_course(edge.course_id)
        if not course:
            raise NotFoundError("Course not found")

        matrix = self._stats.course_matrix(edge.course_id, edge.group_id, faculty_id=edge.faculty_id)
        students = {s.student_id: s for s in self._students.list_by_ids(matrix.roster)}
        return CourseReport(
            course=course,
            group=self._academics.get_group(edge.group_id),
            matrix=matrix,
            aggregate=self._stats.aggregate_of(matrix),
            session_stats=self._stats.per_session_stats(matrix),
            student_stats=self._stats.per_student_stats(matrix),
            students=students,
        )

    def course_report_csv(
        self,
        *,
        faculty_id: int,
        course_id: int,
        group_id: Optional[int] = None,
    ) -> tuple[str, str]:
        """Returns ``(filename, csv_text)``."""

        report = self.course_report(faculty_id=faculty_id, course_id=course_id, group_id=group_id)
        logger.info(
            "Exported course %s group %s (%s sessions) as CSV",
            report.course.course_id,
            report.matrix.group_id,
            len(report.matrix.sessions),
        )
        return csv_filename(report), course_report_csv(report)

    # ---- faculty: student ----

    def student_report(self, *, faculty_id: int, student_id: int) -> dict:
        shared = self._scope.assert_faculty_reaches_student(faculty_id, student_id)
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")

        edges = self._academics.teaching_edges(faculty_id=int(faculty_id), group_ids=shared)
        courses = {c.course_id: c for c in self._academics.list_courses(e.course_id for e in edges)}

        course_reports = []
        for edge in edges:
            stats = self._stats.compute_course_stats_for_student(
                student_id, edge.course_id, [edge.group_id], faculty_id=edge.faculty_id
            )
            if stats.total_sessions == 0:
                continue
            course_reports.append(
                {
                    "course": course_ref(courses.get(edge.course_id), edge.course_id),
                    "group_id": edge.group_id,
                    "stats": stats.summary_dict(),
                    "attendance": [
                        {**session_ref(line.session), **line.view.to_dict()} for line in stats.lines
                    ],
                }
            )

        return {
            "student": {**student_ref(student, student.student_id), "email": student.email},
            "courses": course_reports,
        }

    # ---- faculty: session ----

    def session_report(self, *, faculty_id: int, session_id: int) -> dict:
        session = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        stats, rows = self._stats.session_breakdown(session)
        students = {s.student_id: s for s in self._students.list_by_ids(sid for sid, _ in rows)}
        course = self._academics.get_course(session.course_id)

        return {
            "session": {
                **session_ref(session),
                "course": course_ref(course, session.course_id),
                "group_id": session.group_id,
            },
            "stats": stats.to_dict(),
            "students": [
                {
                    **student_ref(students.get(student_id), student_id),
                    **view_of(record).to_dict(),
                    "location": record.location if record else None,
                }
                for student_id, record in rows
            ],
        }

    # ---- either role ----

    def session_details(self, *, principal: Principal, session_id: int) -> dict:
        """Session header visible to its faculty or to members of its group."""

        session = self._scope.assert_principal_sees_session(principal, session_id)
        course = self._academics.get_course(session.course_id)
        group = self._academics.get_group(session.group_id)
        out = {
            **session_ref(session),
            "course": course_ref(course, session.course_id),
            "group": group_ref(group, session.group_id),
            "faculty": faculty_ref(self._faculty.get_by_id(session.faculty_id), session.faculty_id),
        }
        if isinstance(principal, FacultyPrincipal):
            stats = self._stats.compute_session_stats(session.session_id)
            out["stats"] = stats.to_dict()
        return out

    # ---- student ----

    def student_course_attendance(self, *, student_id: int, course_id: int) -> dict:
        groups = self._scope.assert_student_course_access(student_id, course_id)
        stats = self._stats.compute_course_stats_for_student(student_id, course_id, groups)
        if stats.total_sessions == 0:
            raise NotFoundError("No sessions found for this course")

        course = self._academics.get_course(int(course_id))
        return {
            "course": course_ref(course, int(course_id)),
            "summary": stats.summary_dict(),
            "attendance": [{**session_ref(line.session), **line.view.to_dict()} for line in stats.lines],
        }

    def student_overview(self, *, student_id: int) -> list[dict]:
        groups = self._scope.groups_for_student(student_id)
        if not groups:
            return []

        overview = self._stats.student_overview(student_id, groups)
        courses = {c.course_id: c for c in self._academics.list_courses(o.course_id for o in overview)}
        return [
            {
                "course": course_ref(courses.get(o.course_id), o.course_id),
                "faculty": faculty_ref(self._faculty.get_by_id(o.faculty_id), o.faculty_id),
                "total_sessions": o.sessions,
                "present": o.counts.present,
                "absent": o.counts.absent,
                "late": o.counts.late,
                "unmarked": o.unmarked,
                "attendance_percentage": format_percent(o.rate),
            }
            for o in overview
        ]
