from __future__ import annotations

from typing import Optional

from ..academics.model import Course, Group
from ..sessions.model import Session
from ..users.model import Faculty, Student


def student_ref(student: Optional[Student], student_id: int) -> dict:
    return {
        "id": student_id,
        "name": student.name if student else None,
        "roll_number": student.roll_number if student else None,
    }


def faculty_ref(faculty: Optional[Faculty], faculty_id: int) -> dict:
    return {"id": faculty_id, "name": faculty.name if faculty else None}


def course_ref(course: Optional[Course], course_id: int) -> dict:
    return {
        "id": course_id,
        "name": course.name if course else None,
        "code": course.code if course else None,
    }


def group_ref(group: Optional[Group], group_id: int) -> dict:
    return {"id": group_id, "name": group.name if group else None}


def session_ref(session: Session) -> dict:
    out = session.to_dict()
    for key in ("course_id", "faculty_id", "group_id"):
        out.pop(key)
    return out
