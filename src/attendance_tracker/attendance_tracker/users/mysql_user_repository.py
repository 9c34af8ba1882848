from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Faculty, Student
from .repository import FacultyRepository, StudentRepository


def _to_faculty(r: dict) -> Faculty:
    return Faculty(
        faculty_id=int(r["faculty_id"]),
        name=r["name"],
        email=r["email"],
        employee_id=r["employee_id"],
        department=r["department"],
        password_hash=r["password_hash"],
    )


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        email=r["email"],
        roll_number=r["roll_number"],
        password_hash=r["password_hash"],
    )


class MySQLFacultyRepository(FacultyRepository):
    _COLUMNS = "faculty_id, name, email, employee_id, department, password_hash"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, faculty_id: int) -> Optional[Faculty]:
        with db_cursor(self._conn_factory, operation="faculty.get_by_id") as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM faculty WHERE faculty_id=%s", (int(faculty_id),))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def get_by_email(self, email: str) -> Optional[Faculty]:
        with db_cursor(self._conn_factory, operation="faculty.get_by_email") as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM faculty WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_faculty(r) if r else None

    def create(
        self,
        *,
        name: str,
        email: str,
        employee_id: str,
        department: str,
        password_hash: str,
    ) -> int:
        with db_cursor(self._conn_factory, operation="faculty.create") as (_, cur):
            cur.execute(
                """
                INSERT INTO faculty(name, email, employee_id, department, password_hash)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, employee_id, department, password_hash),
            )
            return int(cur.lastrowid)


class MySQLStudentRepository(StudentRepository):
    _COLUMNS = "student_id, name, email, roll_number, password_hash"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory, operation="students.get_by_id") as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory, operation="students.get_by_email") as (_, cur):
            cur.execute(f"SELECT {self._COLUMNS} FROM students WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_by_ids(self, student_ids: Iterable[int]) -> Sequence[Student]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return []
        placeholders, params = in_clause(ids)
        with db_cursor(self._conn_factory, operation="students.list_by_ids") as (_, cur):
            cur.execute(
                f"SELECT {self._COLUMNS} FROM students WHERE student_id IN ({placeholders}) ORDER BY name, student_id",
                params,
            )
            return [_to_student(r) for r in fetchall(cur)]

    def create(self, *, name: str, email: str, roll_number: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory, operation="students.create") as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, email, roll_number, password_hash)
                VALUES(%s,%s,%s,%s)
                """,
                (name, email, roll_number, password_hash),
            )
            return int(cur.lastrowid)
