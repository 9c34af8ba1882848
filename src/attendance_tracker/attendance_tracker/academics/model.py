from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Course:
    course_id: int
    name: str
    code: str
    description: Optional[str] = None
    credits: int = 0


@dataclass(frozen=True)
class Group:
    """A cohort of students sharing courses and sessions."""

    group_id: int
    name: str
    year: int
    department: str


@dataclass(frozen=True)
class GroupStudent:
    """Roster edge: ``student_id`` belongs to ``group_id``."""

    group_id: int
    student_id: int


@dataclass(frozen=True)
class GroupCourse:
    """Teaching edge: ``faculty_id`` teaches ``course_id`` to ``group_id``."""

    group_id: int
    course_id: int
    faculty_id: int
