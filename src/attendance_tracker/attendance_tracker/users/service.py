from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateRecordError
from ..core.principal import FacultyPrincipal, Principal, StudentPrincipal
from .repository import FacultyRepository, StudentRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AccountService:
    """Use case: faculty/student signup and login."""

    def __init__(self, faculty: FacultyRepository, students: StudentRepository):
        self._faculty = faculty
        self._students = students

    def register_faculty(
        self,
        *,
        name: str,
        email: str,
        employee_id: str,
        department: str,
        password: str,
    ) -> int:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        employee_id = require_non_empty(employee_id, "Employee ID")
        department = require_non_empty(department, "Department")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._faculty.get_by_email(email):
            raise DuplicateRecordError("Faculty with this email already exists")

        faculty_id = self._faculty.create(
            name=name,
            email=email,
            employee_id=employee_id,
            department=department,
            password_hash=generate_password_hash(password),
        )
        logger.info("Registered faculty %s (%s)", faculty_id, employee_id)
        return faculty_id

    def register_student(self, *, name: str, email: str, roll_number: str, password: str) -> int:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        roll_number = require_non_empty(roll_number, "Roll number")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._students.get_by_email(email):
            raise DuplicateRecordError("Student with this email already exists")

        student_id = self._students.create(
            name=name,
            email=email,
            roll_number=roll_number,
            password_hash=generate_password_hash(password),
        )
        logger.info("Registered student %s (%s)", student_id, roll_number)
        return student_id

    def authenticate(self, role: Role, email: str, password: str) -> Principal:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")
        email = email.strip().lower()
        if role == Role.FACULTY:
            account = self._faculty.get_by_email(email)
        else:
            account = self._students.get_by_email(email)

        if not account:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        if role == Role.FACULTY:
            return FacultyPrincipal(faculty_id=account.faculty_id)
        return StudentPrincipal(student_id=account.student_id)
