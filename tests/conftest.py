from __future__ import annotations

from datetime import date, datetime

import pytest
from werkzeug.security import generate_password_hash

import config.testing as testing_settings
from attendance_tracker.academics.model import Course, Group, GroupCourse, GroupStudent
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.container import wire
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.main import create_app
from attendance_tracker.sessions.model import Session
from attendance_tracker.users.model import Faculty, Student

from fakes import (
    CS101,
    CS_A,
    CS_B,
    FACULTY_ADA,
    FACULTY_BOB,
    FUTURE_MATH,
    MATH201,
    PASSWORD,
    PAST_CS,
    PAST_MATH,
    TODAY_CS,
    InMemoryAcademics,
    InMemoryAttendance,
    InMemoryFaculty,
    InMemorySessions,
    InMemoryStore,
    InMemoryStudents,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 11, 9, 10, 0)


@pytest.fixture
def store() -> InMemoryStore:
    pw = generate_password_hash(PASSWORD)
    s = InMemoryStore()

    s.faculty[FACULTY_ADA] = Faculty(FACULTY_ADA, "Ada Lovelace", "ada@uni.edu", "EMP001", "CS", pw)
    s.faculty[FACULTY_BOB] = Faculty(FACULTY_BOB, "Bob Noyce", "bob@uni.edu", "EMP002", "Math", pw)

    for sid, name, roll in (
        (11, "Alice", "CS-011"),
        (12, "Bruno", "CS-012"),
        (13, "Chen", "CS-013"),
        (14, "Dana", "CS-014"),
        (15, "Eve", "CS-015"),
    ):
        s.students[sid] = Student(sid, name, f"{name.lower()}@uni.edu", roll, pw)

    s.courses[CS101] = Course(CS101, "Intro to Programming", "CS101", "Basics", 4)
    s.courses[MATH201] = Course(MATH201, "Linear Algebra", "MATH201", None, 3)
    s.groups[CS_A] = Group(CS_A, "CS-A", 2024, "CS")
    s.groups[CS_B] = Group(CS_B, "CS-B", 2024, "CS")

    s.group_students.extend(
        [GroupStudent(CS_A, 11), GroupStudent(CS_A, 12), GroupStudent(CS_A, 13), GroupStudent(CS_B, 14)]
    )
    s.group_courses.extend(
        [
            GroupCourse(CS_A, CS101, FACULTY_ADA),
            GroupCourse(CS_A, MATH201, FACULTY_BOB),
            GroupCourse(CS_B, MATH201, FACULTY_ADA),
        ]
    )

    s.sessions[PAST_CS] = Session(PAST_CS, CS101, FACULTY_ADA, CS_A, date(2024, 3, 4), "09:00", "10:30", "Variables")
    s.sessions[TODAY_CS] = Session(TODAY_CS, CS101, FACULTY_ADA, CS_A, date(2024, 3, 11), "09:00", "10:30", "Loops")
    s.sessions[PAST_MATH] = Session(PAST_MATH, MATH201, FACULTY_BOB, CS_A, date(2024, 3, 8), "13:00", "14:30", "Matrices")
    s.sessions[FUTURE_MATH] = Session(FUTURE_MATH, MATH201, FACULTY_ADA, CS_B, date(2024, 3, 12), "11:00", "12:00", None)

    marked = datetime(2024, 3, 4, 9, 5)
    for aid, session_id, student_id, status in (
        (9001, PAST_CS, 11, AttendanceStatus.PRESENT),
        (9002, PAST_CS, 12, AttendanceStatus.PRESENT),
        (9003, PAST_CS, 13, AttendanceStatus.ABSENT),
        (9004, PAST_MATH, 11, AttendanceStatus.LATE),
    ):
        s.attendance[aid] = AttendanceRecord(aid, session_id, student_id, status, marked)
    return s


@pytest.fixture
def container(store, fixed_now):
    return wire(
        faculty_repo=InMemoryFaculty(store),
        students_repo=InMemoryStudents(store),
        academics_repo=InMemoryAcademics(store),
        sessions_repo=InMemorySessions(store),
        attendance_repo=InMemoryAttendance(store),
        settings=testing_settings,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(role: str, user_id: int):
        with client.session_transaction() as sess:
            sess["role"] = role
            sess["user_id"] = user_id
        return client

    return _login
