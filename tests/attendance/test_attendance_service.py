from __future__ import annotations

from datetime import datetime

import pytest

import config.testing as testing_settings
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.container import wire
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import (
    AlreadyMarkedError,
    DuplicateRecordError,
    ForbiddenError,
    NotFoundError,
    SessionNotStartedError,
    ValidationError,
)

from fakes import (
    FACULTY_ADA,
    FACULTY_BOB,
    FUTURE_MATH,
    PAST_CS,
    PAST_MATH,
    TODAY_CS,
    InMemoryAcademics,
    InMemoryAttendance,
    InMemoryFaculty,
    InMemorySessions,
    InMemoryStudents,
)


def test_self_mark_then_second_attempt_is_rejected(container, store, fixed_now):
    svc = container.attendance_service

    record = svc.self_mark_attendance(student_id=11, session_id=TODAY_CS, location="Room 4", now=fixed_now)
    assert record.status == AttendanceStatus.PRESENT
    assert record.location == "Room 4"

    with pytest.raises(AlreadyMarkedError) as exc:
        svc.self_mark_attendance(student_id=11, session_id=TODAY_CS, now=datetime(2024, 3, 11, 9, 40))
    assert exc.value.status == AttendanceStatus.PRESENT

    rows = [r for r in store.attendance.values() if r.session_id == TODAY_CS]
    assert len(rows) == 1
    assert rows[0].status == AttendanceStatus.PRESENT


def test_self_mark_late(container):
    record = container.attendance_service.self_mark_attendance(
        student_id=12, session_id=TODAY_CS, now=datetime(2024, 3, 11, 9, 20)
    )
    assert record.status == AttendanceStatus.LATE


def test_non_member_self_mark_creates_nothing(container, store, fixed_now):
    before = dict(store.attendance)
    with pytest.raises(ForbiddenError):
        container.attendance_service.self_mark_attendance(student_id=14, session_id=TODAY_CS, now=fixed_now)
    assert store.attendance == before


def test_self_mark_before_start(container, fixed_now):
    with pytest.raises(SessionNotStartedError):
        container.attendance_service.self_mark_attendance(student_id=14, session_id=FUTURE_MATH, now=fixed_now)


def test_self_mark_requires_session_id(container, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.self_mark_attendance(student_id=11, session_id=None, now=fixed_now)


def test_bulk_mark_reports_each_entry(container, store, fixed_now):
    result = container.attendance_service.mark_attendance_bulk(
        faculty_id=FACULTY_ADA,
        session_id=TODAY_CS,
        entries=[
            {"student_id": 11, "status": "present"},
            {"student_id": 12, "status": "bogus"},
            {"student_id": 14, "status": "present"},
            {"student_id": 13, "status": "late"},
            "not-a-dict",
        ],
        now=fixed_now,
    )

    assert [o.student_id for o in result.succeeded] == [11, 13]
    assert len(result.failed) == 3
    body = result.to_dict()
    assert body["recorded"] == 2
    assert all("error" in r for r in body["records"] if not r["recorded"])

    stats = container.stats_service.compute_session_stats(TODAY_CS)
    assert (stats.present, stats.late, stats.unmarked) == (1, 1, 1)


def test_bulk_mark_is_an_upsert(container, store, fixed_now):
    result = container.attendance_service.mark_attendance_bulk(
        faculty_id=FACULTY_ADA,
        session_id=PAST_CS,
        entries=[{"student_id": 13, "status": "present"}],
        now=fixed_now,
    )
    assert result.outcomes[0].created is False
    assert store.attendance[9003].status == AttendanceStatus.PRESENT
    assert container.stats_service.compute_session_stats(PAST_CS).rate == 100


def test_bulk_mark_scope_and_shape(container, fixed_now):
    svc = container.attendance_service
    with pytest.raises(NotFoundError):
        svc.mark_attendance_bulk(faculty_id=FACULTY_BOB, session_id=TODAY_CS, entries=[], now=fixed_now)
    with pytest.raises(ValidationError):
        svc.mark_attendance_bulk(faculty_id=FACULTY_ADA, session_id=TODAY_CS, entries="nope", now=fixed_now)


def test_single_mark_rejects_unmarked_and_outsiders(container, fixed_now):
    svc = container.attendance_service
    with pytest.raises(ValidationError):
        svc.mark_attendance_single(
            faculty_id=FACULTY_ADA, session_id=TODAY_CS, student_id=11, status="unmarked", now=fixed_now
        )
    with pytest.raises(ForbiddenError):
        svc.mark_attendance_single(
            faculty_id=FACULTY_ADA, session_id=TODAY_CS, student_id=14, status="present", now=fixed_now
        )


def test_update_record(container, store, fixed_now):
    svc = container.attendance_service

    updated = svc.update_record(faculty_id=FACULTY_BOB, attendance_id=9004, status="present", now=fixed_now)
    assert updated.status == AttendanceStatus.PRESENT
    assert store.attendance[9004].marked_at == fixed_now

    with pytest.raises(ForbiddenError):
        svc.update_record(faculty_id=FACULTY_ADA, attendance_id=9004, status="absent", now=fixed_now)
    with pytest.raises(NotFoundError):
        svc.update_record(faculty_id=FACULTY_ADA, attendance_id=123456, status="absent", now=fixed_now)
    assert store.attendance[9004].status == AttendanceStatus.PRESENT


def test_get_record_is_scoped(container):
    assert container.attendance_service.get_record(faculty_id=FACULTY_BOB, attendance_id=9004).session_id == PAST_MATH
    with pytest.raises(NotFoundError):
        container.attendance_service.get_record(faculty_id=FACULTY_ADA, attendance_id=9004)


@pytest.mark.parametrize("entries", [5, None, "nope", {"student_id": 11, "status": "present"}])
def test_bulk_mark_requires_a_list(container, store, fixed_now, entries):
    before = dict(store.attendance)
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance_bulk(
            faculty_id=FACULTY_ADA, session_id=TODAY_CS, entries=entries, now=fixed_now
        )
    assert store.attendance == before


@pytest.mark.parametrize("student_id", [True, 11.5, "eleven"])
def test_single_mark_rejects_malformed_student_ids(container, store, fixed_now, student_id):
    before = dict(store.attendance)
    with pytest.raises(ValidationError):
        container.attendance_service.mark_attendance_single(
            faculty_id=FACULTY_ADA, session_id=TODAY_CS, student_id=student_id, status="present", now=fixed_now
        )
    assert store.attendance == before


class LostRaceAttendance(InMemoryAttendance):
    """Another writer inserted the row between the existence check and the insert."""

    def get_for_session_and_student(self, session_id, student_id):
        return None

    def create(self, **kwargs):
        raise DuplicateRecordError("Duplicate entry for session and student")


@pytest.fixture
def racing_container(store, fixed_now):
    return wire(
        faculty_repo=InMemoryFaculty(store),
        students_repo=InMemoryStudents(store),
        academics_repo=InMemoryAcademics(store),
        sessions_repo=InMemorySessions(store),
        attendance_repo=LostRaceAttendance(store),
        settings=testing_settings,
        clock=lambda: fixed_now,
    )


def test_concurrent_self_mark_surfaces_duplicate(racing_container, store, fixed_now):
    winner = AttendanceRecord(9100, TODAY_CS, 11, AttendanceStatus.ABSENT, datetime(2024, 3, 11, 9, 5))
    store.attendance[9100] = winner

    with pytest.raises(DuplicateRecordError):
        racing_container.attendance_service.self_mark_attendance(student_id=11, session_id=TODAY_CS, now=fixed_now)

    assert store.attendance[9100] == winner
    assert len([r for r in store.attendance.values() if r.session_id == TODAY_CS]) == 1


def test_concurrent_faculty_mark_surfaces_duplicate(racing_container, store, fixed_now):
    winner = AttendanceRecord(9100, TODAY_CS, 12, AttendanceStatus.LATE, datetime(2024, 3, 11, 9, 5))
    store.attendance[9100] = winner

    with pytest.raises(DuplicateRecordError):
        racing_container.attendance_service.mark_attendance_single(
            faculty_id=FACULTY_ADA, session_id=TODAY_CS, student_id=12, status="absent", now=fixed_now
        )

    assert store.attendance[9100] == winner
