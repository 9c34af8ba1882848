from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, session_id, student_id, status, marked_at, location"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        student_id=int(r["student_id"]),
        status=AttendanceStatus(r["status"]),
        marked_at=r["marked_at"],
        location=r.get("location"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, operation="attendance.get_by_id") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_session_and_student(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, operation="attendance.get_for_session_and_student") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE session_id=%s AND student_id=%s",
                (int(session_id), int(student_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_sessions(
        self,
        session_ids: Iterable[int],
        *,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        ids = sorted({int(i) for i in session_ids})
        if not ids:
            return []

        placeholders, params = in_clause(ids)
        where = f"session_id IN ({placeholders})"
        if student_id is not None:
            where += " AND student_id=%s"
            params = params + (int(student_id),)

        with db_cursor(self._conn_factory, operation="attendance.list_for_sessions") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE {where} ORDER BY session_id, student_id", params)
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        session_id: int,
        student_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
        location: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory, operation="attendance.create") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(session_id, student_id, status, marked_at, location)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(session_id), int(student_id), status.value, marked_at, location),
            )
            return int(cur.lastrowid)

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, marked_at: datetime) -> bool:
        with db_cursor(self._conn_factory, operation="attendance.update_status") as (_, cur):
            cur.execute(
                "UPDATE attendance SET status=%s, marked_at=%s WHERE attendance_id=%s",
                (status.value, marked_at, int(attendance_id)),
            )
            return cur.rowcount > 0
