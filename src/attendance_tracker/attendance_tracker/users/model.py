from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Faculty:
    """Domain entity: a faculty member.

    Plain data object (no DB access code).
    """

    faculty_id: int
    name: str
    email: str
    employee_id: str
    department: str
    password_hash: str


@dataclass(frozen=True)
class Student:
    """Domain entity: a student."""

    student_id: int
    name: str
    email: str
    roll_number: str
    password_hash: str
