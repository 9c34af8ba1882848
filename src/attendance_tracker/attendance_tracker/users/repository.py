from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Faculty, Student


class FacultyRepository(Protocol):
    """Repository interface for Faculty.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, faculty_id: int) -> Optional[Faculty]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Faculty]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        employee_id: str,
        department: str,
        password_hash: str,
    ) -> int:
        """Raises ``DuplicateRecordError`` on email/employee_id collision."""

        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def list_by_ids(self, student_ids: Iterable[int]) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, roll_number: str, password_hash: str) -> int:
        """Raises ``DuplicateRecordError`` on email/roll_number collision."""

        raise NotImplementedError
