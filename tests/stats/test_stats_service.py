from __future__ import annotations

import pytest

from attendance_tracker.attendance.model import Recorded, Unmarked
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import NotFoundError
from attendance_tracker.stats.service import AttendanceStatsService

from fakes import CS101, CS_A, CS_B, FACULTY_ADA, MATH201, PAST_CS, PAST_MATH, TODAY_CS


def test_three_students_two_present_one_absent(container):
    stats = container.stats_service.compute_session_stats(PAST_CS)

    assert stats.total == 3
    assert (stats.present, stats.absent, stats.late, stats.unmarked) == (2, 1, 0, 0)
    assert stats.rate == 67
    assert stats.to_dict()["attendance_rate"] == "67%"


def test_counts_always_cover_the_roster(container, store):
    for session_id in store.sessions:
        s = container.stats_service.compute_session_stats(session_id)
        assert s.present + s.absent + s.late + s.unmarked == s.total


def test_records_of_former_members_are_ignored(container, store):
    store.group_students = [m for m in store.group_students if m.student_id != 13]

    s = container.stats_service.compute_session_stats(PAST_CS)
    assert s.total == 2
    assert (s.present, s.absent, s.unmarked) == (2, 0, 0)


def test_rate_does_not_drop_when_unmarked_becomes_present(container, fixed_now):
    before = container.stats_service.compute_session_stats(TODAY_CS).rate
    assert before == 0

    container.attendance_service.mark_attendance_single(
        faculty_id=FACULTY_ADA, session_id=TODAY_CS, student_id=11, status="present", now=fixed_now
    )
    after = container.stats_service.compute_session_stats(TODAY_CS)
    assert after.rate == 33
    assert after.rate >= before
    assert after.unmarked == 2


def test_missing_session(container):
    with pytest.raises(NotFoundError):
        container.stats_service.compute_session_stats(999999)


def test_course_aggregate_divides_by_every_possible_mark(container):
    agg = container.stats_service.compute_course_stats_aggregate(CS101, CS_A, faculty_id=FACULTY_ADA)

    assert (agg.sessions, agg.students, agg.total_possible) == (2, 3, 6)
    assert agg.aggregate_fill_rate == 33
    assert agg.to_dict()["unmarked"] == 3


def test_per_student_rate_divides_by_sessions(container):
    stats = container.stats_service
    matrix = stats.course_matrix(CS101, CS_A, faculty_id=FACULTY_ADA)
    by_student = {s.student_id: s for s in stats.per_student_stats(matrix)}

    assert [s.session_id for s in matrix.sessions] == [TODAY_CS, PAST_CS]
    assert by_student[11].per_student_rate == 50
    assert by_student[13].per_student_rate == 0
    assert isinstance(by_student[11].lines[0].view, Unmarked)
    assert isinstance(by_student[11].lines[1].view, Recorded)


def test_late_counts_half(container):
    stats = container.stats_service.compute_course_stats_for_student(11, MATH201, [CS_A])
    assert stats.total_sessions == 1
    assert stats.counts.late == 1
    assert stats.per_student_rate == 50
    assert stats.summary_dict()["attendance_percentage"] == "50%"


def test_no_sessions_uses_the_empty_rate(container):
    stats = container.stats_service
    assert stats.compute_course_stats_for_student(14, CS101, [CS_B]).per_student_rate == 0
    assert stats.compute_course_stats_for_student(14, CS101, [CS_B], empty_rate=100).per_student_rate == 100


def test_student_overview_groups_by_course(container):
    overview = {o.course_id: o for o in container.stats_service.student_overview(11, [CS_A])}

    assert set(overview) == {CS101, MATH201}
    assert overview[CS101].sessions == 2
    assert overview[CS101].rate == 50
    assert overview[MATH201].counts.late == 1
    assert overview[MATH201].rate == 50


def test_sequential_and_parallel_reads_agree(store, container):
    sequential = container.stats_service
    parallel = AttendanceStatsService(
        container.academics_repo, container.sessions_repo, container.attendance_repo, parallel_reads=True
    )
    session = store.sessions[PAST_MATH]

    a, rows_a = sequential.session_breakdown(session)
    b, rows_b = parallel.session_breakdown(session)
    assert a == b
    assert rows_a == rows_b
    assert [r.status for _, r in rows_a if r] == [AttendanceStatus.LATE]
