from __future__ import annotations

import csv
import io

import pytest

from attendance_tracker.core.constants import CSV_HEADER
from attendance_tracker.core.exceptions import ForbiddenError, NotFoundError
from attendance_tracker.core.principal import FacultyPrincipal, StudentPrincipal

from fakes import CS101, CS_A, CS_B, FACULTY_ADA, FACULTY_BOB, FUTURE_MATH, MATH201, PAST_CS, TODAY_CS


def test_course_report_defaults_to_first_group(container):
    report = container.report_service.course_report(faculty_id=FACULTY_ADA, course_id=CS101)
    body = report.to_dict()

    assert body["course"]["code"] == "CS101"
    assert body["group"]["id"] == CS_A
    assert body["total_sessions"] == 2
    assert body["summary"]["attendance_rate"] == "33%"
    assert [s["id"] for s in body["sessions"]] == [TODAY_CS, PAST_CS]
    assert body["sessions"][1]["stats"]["attendance_rate"] == "67%"

    students = {s["student"]["id"]: s for s in body["students"]}
    assert set(students) == {11, 12, 13}
    assert students[11]["stats"]["attendance_percentage"] == "50%"
    assert [a["status"] for a in students[13]["attendance"]] == ["unmarked", "absent"]


def test_course_report_scope(container):
    svc = container.report_service
    with pytest.raises(ForbiddenError):
        svc.course_report(faculty_id=FACULTY_BOB, course_id=CS101)
    with pytest.raises(ForbiddenError):
        svc.course_report(faculty_id=FACULTY_ADA, course_id=CS101, group_id=CS_B)


def test_csv_export_matches_json_report(container):
    svc = container.report_service
    report = svc.course_report(faculty_id=FACULTY_ADA, course_id=CS101)
    filename, text = svc.course_report_csv(faculty_id=FACULTY_ADA, course_id=CS101)

    assert filename.endswith(".csv")
    assert text.splitlines()[0] == ",".join(CSV_HEADER)

    parsed = list(csv.DictReader(io.StringIO(text)))
    from_csv = {(r["Student Name"], r["Session Date"], r["Status"]) for r in parsed}

    body = report.to_dict()
    from_json = {
        (s["student"]["name"], a["date"], a["status"])
        for s in body["students"]
        for a in s["attendance"]
    }
    assert len(parsed) == 6
    assert from_csv == from_json
    assert ("Chen", "2024-03-04", "absent") in from_csv


def test_student_report_covers_shared_groups_only(container):
    body = container.report_service.student_report(faculty_id=FACULTY_ADA, student_id=11)

    assert body["student"]["roll_number"] == "CS-011"
    assert [c["course"]["id"] for c in body["courses"]] == [CS101]
    assert body["courses"][0]["stats"]["total_sessions"] == 2

    with pytest.raises(ForbiddenError):
        container.report_service.student_report(faculty_id=FACULTY_BOB, student_id=14)


def test_session_report_lists_full_roster(container):
    body = container.report_service.session_report(faculty_id=FACULTY_ADA, session_id=TODAY_CS)

    assert body["stats"]["unmarked"] == 3
    assert body["stats"]["attendance_rate"] == "0%"
    assert [s["status"] for s in body["students"]] == ["unmarked"] * 3
    assert all(s["timestamp"] is None for s in body["students"])

    with pytest.raises(NotFoundError):
        container.report_service.session_report(faculty_id=FACULTY_BOB, session_id=TODAY_CS)


def test_session_details_for_either_role(container):
    svc = container.report_service
    as_faculty = svc.session_details(principal=FacultyPrincipal(FACULTY_ADA), session_id=PAST_CS)
    as_student = svc.session_details(principal=StudentPrincipal(12), session_id=PAST_CS)

    assert as_faculty["stats"]["present"] == 2
    assert "stats" not in as_student
    assert as_student["faculty"]["name"] == "Ada Lovelace"

    with pytest.raises(ForbiddenError):
        svc.session_details(principal=StudentPrincipal(14), session_id=PAST_CS)


def test_student_course_attendance(container, store):
    svc = container.report_service

    body = svc.student_course_attendance(student_id=11, course_id=MATH201)
    assert body["summary"]["late"] == 1
    assert body["summary"]["attendance_percentage"] == "50%"
    assert body["attendance"][0]["status"] == "late"

    with pytest.raises(ForbiddenError):
        svc.student_course_attendance(student_id=14, course_id=CS101)

    del store.sessions[FUTURE_MATH]
    with pytest.raises(NotFoundError):
        svc.student_course_attendance(student_id=14, course_id=MATH201)


def test_student_overview(container):
    rows = {r["course"]["id"]: r for r in container.report_service.student_overview(student_id=11)}

    assert rows[CS101]["total_sessions"] == 2
    assert rows[CS101]["attendance_percentage"] == "50%"
    assert rows[MATH201]["faculty"]["name"] == "Bob Noyce"
    assert container.report_service.student_overview(student_id=15) == []
