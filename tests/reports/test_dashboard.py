from __future__ import annotations

from datetime import datetime

from fakes import FACULTY_ADA, FACULTY_BOB, TODAY_CS


def test_faculty_dashboard(container, fixed_now):
    body = container.dashboard_service.faculty_dashboard(faculty_id=FACULTY_ADA, now=fixed_now)

    # 502 has started with nobody marked; 501 is complete.
    assert body == {"courses": 2, "students": 4, "today_sessions": 1, "pending_tasks": 1}


def test_faculty_dashboard_pending_clears_once_roster_is_marked(container, fixed_now):
    container.attendance_service.mark_attendance_bulk(
        faculty_id=FACULTY_ADA,
        session_id=TODAY_CS,
        entries=[{"student_id": sid, "status": "present"} for sid in (11, 12, 13)],
        now=fixed_now,
    )
    assert container.dashboard_service.faculty_dashboard(faculty_id=FACULTY_ADA, now=fixed_now)["pending_tasks"] == 0


def test_faculty_dashboard_for_other_faculty(container, fixed_now):
    body = container.dashboard_service.faculty_dashboard(faculty_id=FACULTY_BOB, now=fixed_now)
    assert body == {"courses": 1, "students": 3, "today_sessions": 0, "pending_tasks": 1}


def test_student_dashboard_before_class(container):
    body = container.dashboard_service.student_dashboard(student_id=11, now=datetime(2024, 3, 11, 8, 0))

    assert body["courses"] == 2
    assert body["upcoming_sessions"] == 1
    # past: 501 present, 503 late -> (1 + 0.5) / 2
    assert body["attendance_rate"] == "75%"
    assert body["missed_sessions"] == 0
    assert [s["id"] for s in body["today_sessions"]] == [TODAY_CS]
    assert body["today_sessions"][0]["faculty"] == "Ada Lovelace"


def test_student_dashboard_counts_started_sessions_as_past(container, fixed_now):
    body = container.dashboard_service.student_dashboard(student_id=13, now=fixed_now)

    assert body["upcoming_sessions"] == 0
    assert body["attendance_rate"] == "0%"
    assert body["missed_sessions"] == 1


def test_student_without_groups_gets_full_rate(container, fixed_now):
    body = container.dashboard_service.student_dashboard(student_id=15, now=fixed_now)
    assert body == {
        "courses": 0,
        "upcoming_sessions": 0,
        "attendance_rate": "100%",
        "missed_sessions": 0,
        "today_sessions": [],
    }
