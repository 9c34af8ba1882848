from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def get_for_faculty(self, session_id: int, faculty_id: int) -> Optional[Session]:
        """Single combined lookup: ``None`` both when missing and when owned by someone else."""

        raise NotImplementedError

    def find(
        self,
        *,
        faculty_id: Optional[int] = None,
        course_id: Optional[int] = None,
        group_ids: Optional[Iterable[int]] = None,
        on_date: Optional[date] = None,
    ) -> Sequence[Session]:
        """Sessions matching every given filter, newest first (date, then start time)."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update(
        self,
        *,
        session_id: int,
        session_date: date,
        start_time: str,
        end_time: str,
        topic: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete_with_attendance(self, session_id: int) -> int:
        """Delete the session's attendance rows, then the session, atomically.

        Returns the number of attendance rows removed.
        """

        raise NotImplementedError
