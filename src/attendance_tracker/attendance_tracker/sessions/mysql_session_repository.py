from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_id, course_id, faculty_id, group_id, session_date, start_time, end_time, topic"


def _to_session(r: dict) -> Session:
    return Session(
        session_id=int(r["session_id"]),
        course_id=int(r["course_id"]),
        faculty_id=int(r["faculty_id"]),
        group_id=int(r["group_id"]),
        date=r["session_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        topic=r.get("topic"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory, operation="sessions.get_by_id") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM class_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_for_faculty(self, session_id: int, faculty_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory, operation="sessions.get_for_faculty") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM class_sessions WHERE session_id=%s AND faculty_id=%s",
                (int(session_id), int(faculty_id)),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def find(
        self,
        *,
        faculty_id: Optional[int] = None,
        course_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
        on_date: Optional[date] = None,
    ) -> Sequence[Session]:
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
        if on_date is not None:
            clauses.append("session_date=%s")
            params.append(on_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory, operation="sessions.find") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_sessions
                {where}
                ORDER BY session_date DESC, start_time DESC, session_id DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        course_id: int,
        faculty_id: int,
        group_id: int,
        session_date: date,
        start_time: str,
        end_time: str,
        topic: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory, operation="sessions.create") as (_, cur):
            cur.execute(
                """
                INSERT INTO class_sessions(course_id, faculty_id, group_id, session_date, start_time, end_time, topic)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(course_id), int(faculty_id), int(group_id), session_date, start_time, end_time, topic),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        session_id: int,
        session_date: date,
        start_time: str,
        end_time: str,
        topic: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory, operation="sessions.update") as (_, cur):
            cur.execute(
                """
                UPDATE class_sessions
                SET session_date=%s, start_time=%s, end_time=%s, topic=%s
                WHERE session_id=%s
                """,
                (session_date, start_time, end_time, topic, int(session_id)),
            )
            return cur.rowcount > 0

    def delete_with_attendance(self, session_id: int) -> int:
        # Both statements share one transaction; db_cursor rolls back if either fails.
        with db_cursor(self._conn_factory, operation="sessions.delete_with_attendance") as (_, cur):
            cur.execute("DELETE FROM attendance WHERE session_id=%s", (int(session_id),))
            removed = int(cur.rowcount)
            cur.execute("DELETE FROM class_sessions WHERE session_id=%s", (int(session_id),))
            if cur.rowcount == 0:
                raise NotFoundError("Session not found")
            return removed
