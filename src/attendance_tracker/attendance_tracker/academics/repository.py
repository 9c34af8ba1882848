from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Course, Group, GroupCourse, GroupStudent


class AcademicRepository(Protocol):
    """Courses, groups and the two edge tables that connect them to people."""

    def get_course(self, course_id: int) -> Optional[Course]:
        raise NotImplementedError

    def list_courses(self, course_ids: Iterable[int]) -> Sequence[Course]:
        raise NotImplementedError

    def get_group(self, group_id: int) -> Optional[Group]:
        raise NotImplementedError

    def list_groups(self, group_ids: Iterable[int]) -> Sequence[Group]:
        raise NotImplementedError

    def memberships(
        self,
        *,
        student_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[GroupStudent]:
        """GroupStudent rows filtered by student and/or groups, ordered by group then student."""

        raise NotImplementedError

    def teaching_edges(
        self,
        *,
        faculty_id: Optional[int] = None,
        course_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[GroupCourse]:
        """GroupCourse rows matching every given filter, ordered by group then course."""

        raise NotImplementedError
