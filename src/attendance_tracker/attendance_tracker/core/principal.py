from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .enums import Role
from .exceptions import AuthenticationError


@dataclass(frozen=True)
class FacultyPrincipal:
    faculty_id: int

    @property
    def role(self) -> Role:
        return Role.FACULTY


@dataclass(frozen=True)
class StudentPrincipal:
    student_id: int

    @property
    def role(self) -> Role:
        return Role.STUDENT


Principal = Union[FacultyPrincipal, StudentPrincipal]


def principal_from_session(data: dict) -> Principal:
    """Rebuild a principal from the ``{"role", "user_id"}`` pair kept in the login session."""

    try:
        role = Role(data.get("role"))
        user_id = int(data["user_id"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Authentication required")

    if role == Role.FACULTY:
        return FacultyPrincipal(faculty_id=user_id)
    return StudentPrincipal(student_id=user_id)


def principal_to_session(principal: Principal) -> dict:
    if isinstance(principal, FacultyPrincipal):
        return {"role": Role.FACULTY.value, "user_id": principal.faculty_id}
    if isinstance(principal, StudentPrincipal):
        return {"role": Role.STUDENT.value, "user_id": principal.student_id}
    raise TypeError(f"Unsupported principal: {principal!r}")
