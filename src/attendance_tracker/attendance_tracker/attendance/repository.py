from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_student(self, session_id: int, student_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_sessions(
        self,
        session_ids: Iterable[int],
        *,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        session_id: int,
        student_id: int,
        status: AttendanceStatus,
        marked_at: datetime,
        location: Optional[str] = None,
    ) -> int:
        """Raises ``DuplicateRecordError`` if (session, student) already has a row."""

        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus, marked_at: datetime) -> bool:
        """Faculty-only overwrite of status and timestamp."""

        raise NotImplementedError
