from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from ..academics.model import Course, Group
from ..stats.model import CourseAggregate, CourseMatrix, SessionStats, StudentCourseStats
from ..users.model import Student
from .formatting import group_ref, session_ref, student_ref


@dataclass(frozen=True)
class CourseReport:
    """Everything needed to render a course report as JSON or CSV."""

    course: Course
    group: Optional[Group]
    matrix: CourseMatrix
    aggregate: CourseAggregate
    session_stats: list[SessionStats]
    student_stats: list[StudentCourseStats]
    students: dict[int, Student]

    def to_dict(self) -> dict:
        return {
            "course": {
                "id": self.course.course_id,
                "name": self.course.name,
                "code": self.course.code,
                "description": self.course.description,
                "credits": self.course.credits,
            },
            "group": group_ref(self.group, self.matrix.group_id),
            "total_sessions": len(self.matrix.sessions),
            "summary": self.aggregate.to_dict(),
            "sessions": [
                {**session_ref(s), "stats": st.to_dict()}
                for s, st in zip(self.matrix.sessions, self.session_stats)
            ],
            "students": [
                {
                    "student": student_ref(self.students.get(st.student_id), st.student_id),
                    "stats": st.summary_dict(),
                    "attendance": [
                        {
                            "session_id": line.session.session_id,
                            "date": line.session.date.isoformat(),
                            "status": line.view.label,
                        }
                        for line in st.lines
                    ],
                }
                for st in self.student_stats
            ],
        }

    def rows(self) -> Iterator[tuple[str, str, str, str]]:
        """One ``(name, roll number, YYYY-MM-DD, status)`` row per student x session."""

        for st in self.student_stats:
            student = self.students.get(st.student_id)
            name = student.name if student else ""
            roll = student.roll_number if student else ""
            for line in st.lines:
                yield name, roll, line.session.date.strftime("%Y-%m-%d"), line.view.label
