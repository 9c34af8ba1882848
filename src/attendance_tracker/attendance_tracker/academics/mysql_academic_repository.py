from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Course, Group, GroupCourse, GroupStudent
from .repository import AcademicRepository


def _to_course(r: dict) -> Course:
    return Course(
        course_id=int(r["course_id"]),
        name=r["name"],
        code=r["code"],
        description=r.get("description"),
        credits=int(r.get("credits") or 0),
    )


def _to_group(r: dict) -> Group:
    return Group(
        group_id=int(r["group_id"]),
        name=r["name"],
        year=int(r["year"]),
        department=r["department"],
    )


class MySQLAcademicRepository(AcademicRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_course(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory, operation="courses.get") as (_, cur):
            cur.execute(
                "SELECT course_id, name, code, description, credits FROM courses WHERE course_id=%s",
                (int(course_id),),
            )
            r = fetchone(cur)
            return _to_course(r) if r else None

    def list_courses(self, course_ids: Iterable[int]) -> Sequence[Course]:
        ids = sorted({int(i) for i in course_ids})
        if not ids:
            return []
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory, operation="courses.list") as (_, cur):
            cur.execute(
                f"""
                SELECT course_id, name, code, description, credits
                FROM courses
                WHERE course_id IN ({placeholders})
                ORDER BY code
                """,
                params,
            )
            return [_to_course(r) for r in fetchall(cur)]

    def get_group(self, group_id: int) -> Optional[Group]:
        with db_cursor(self._conn_factory, operation="groups.get") as (_, cur):
            cur.execute(
                "SELECT group_id, name, year, department FROM student_groups WHERE group_id=%s",
                (int(group_id),),
            )
            r = fetchone(cur)
            return _to_group(r) if r else None

    def list_groups(self, group_ids: Iterable[int]) -> Sequence[Group]:
        ids = sorted({int(i) for i in group_ids})
        if not ids:
            return []
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory, operation="groups.list") as (_, cur):
            cur.execute(
                f"""
                SELECT group_id, name, year, department
                FROM student_groups
                WHERE group_id IN ({placeholders})
                ORDER BY group_id
                """,
                params,
            )
            return [_to_group(r) for r in fetchall(cur)]

    def memberships(
        self,
        *,
        student_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[GroupStudent]:
        clauses: list[str] = []
        params: list[object] = []

        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))
        if group_ids is not None:
            ids = sorted({int(i) for i in group_ids})
            if not ids:
                return []
            placeholders, values = in_clause(ids)
            clauses.append(f"group_id IN ({placeholders})")
            params.extend(values)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory, operation="group_students.find") as (_, cur):
            cur.execute(
                f"SELECT group_id, student_id FROM group_students {where} ORDER BY group_id, student_id",
                tuple(params),
            )
            return [GroupStudent(group_id=int(r["group_id"]), student_id=int(r["student_id"])) for r in fetchall(cur)]

    def teaching_edges(
        self,
        *,
        faculty_id: Optional[int] = None,
        course_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[GroupCourse]:
        clauses: list[str] = []
        params: list[object] = []

        if faculty_id is not None:
            clauses.append("faculty_id=%s")
            params.append(int(faculty_id))
        if course_id is not None:
            clauses.append("course_id=%s")
            params.append(int(course_id))
        if group_ids is not None:
            ids = sorted({int(i) for i in group_ids})
            if not ids:
                return []
            placeholders, values = in_clause(ids)
            clauses.append(f"group_id IN ({placeholders})")
            params.extend(values)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory, operation="group_courses.find") as (_, cur):
            cur.execute(
                f"""
                SELECT group_id, course_id, faculty_id
                FROM group_courses
                {where}
                ORDER BY group_id, course_id
                """,
                tuple(params),
            )
            return [
                GroupCourse(
                    group_id=int(r["group_id"]),
                    course_id=int(r["course_id"]),
                    faculty_id=int(r["faculty_id"]),
                )
                for r in fetchall(cur)
            ]
