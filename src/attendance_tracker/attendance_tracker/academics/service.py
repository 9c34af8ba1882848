from __future__ import annotations

from ..core.exceptions import NotFoundError
from ..scope.resolver import ScopeResolver
from ..users.repository import FacultyRepository, StudentRepository
from .repository import AcademicRepository


def course_ref(course) -> dict:
    return {"id": course.course_id, "name": course.name, "code": course.code}


def group_ref(group) -> dict:
    return {"id": group.group_id, "name": group.name, "year": group.year}


class AcademicService:
    """Read-only course/group/roster listings, always scoped to the caller."""

    def __init__(
        self,
        academics: AcademicRepository,
        faculty: FacultyRepository,
        students: StudentRepository,
        scope: ScopeResolver,
    ):
        self._academics = academics
        self._faculty = faculty
        self._students = students
        self._scope = scope

    def courses_for_faculty(self, *, faculty_id: int) -> list[dict]:
        edges = self._academics.teaching_edges(faculty_id=int(faculty_id))
        courses = {c.course_id: c for c in self._academics.list_courses(e.course_id for e in edges)}
        groups = {g.group_id: g for g in self._academics.list_groups(e.group_id for e in edges)}

        out = []
        for e in edges:
            course, group = courses.get(e.course_id), groups.get(e.group_id)
            if not course or not group:
                continue
            out.append(
                {
                    **course_ref(course),
                    "credits": course.credits,
                    "group": {**group_ref(group), "department": group.department},
                }
            )
        return out

    def course_for_faculty(self, *, faculty_id: int, course_id: int) -> dict:
        edges = self._academics.teaching_edges(faculty_id=int(faculty_id), course_id=int(course_id))
        course = self._academics.get_course(int(course_id)) if edges else None
        if not course:
            raise NotFoundError("Course not found or access denied")

        group = self._academics.get_group(edges[0].group_id)
        return {
            **course_ref(course),
            "credits": course.credits,
            "description": course.description,
            "group": group_ref(group) if group else None,
            "groups": [e.group_id for e in edges],
        }

    def students_for_faculty(self, *, faculty_id: int) -> list[dict]:
        groups = self._scope.groups_for_faculty(faculty_id)
        if not groups:
            return []

        memberships = self._academics.memberships(group_ids=groups)
        students = {s.student_id: s for s in self._students.list_by_ids(m.student_id for m in memberships)}
        group_map = {g.group_id: g for g in self._academics.list_groups(groups)}

        out = []
        for m in memberships:
            student, group = students.get(m.student_id), group_map.get(m.group_id)
            if not student or not group:
                continue
            out.append(
                {
                    "id": student.student_id,
                    "name": student.name,
                    "email": student.email,
                    "roll_number": student.roll_number,
                    "group": group_ref(group),
                }
            )
        return out

    def courses_for_student(self, *, student_id: int) -> list[dict]:
        groups = self._scope.groups_for_student(student_id)
        if not groups:
            return []

        edges = self._academics.teaching_edges(group_ids=groups)
        courses = {c.course_id: c for c in self._academics.list_courses(e.course_id for e in edges)}
        group_map = {g.group_id: g for g in self._academics.list_groups(groups)}

        out = []
        for e in edges:
            course, group = courses.get(e.course_id), group_map.get(e.group_id)
            if not course or not group:
                continue
            faculty = self._faculty.get_by_id(e.faculty_id)
            out.append(
                {
                    **course_ref(course),
                    "credits": course.credits,
                    "faculty": {"id": e.faculty_id, "name": faculty.name if faculty else None},
                    "group": {"id": group.group_id, "name": group.name},
                }
            )
        return out
