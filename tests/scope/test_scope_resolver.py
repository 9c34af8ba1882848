from __future__ import annotations

import pytest

from attendance_tracker.core.exceptions import ForbiddenError, NotFoundError
from attendance_tracker.core.principal import FacultyPrincipal, StudentPrincipal

from fakes import CS101, CS_A, CS_B, FACULTY_ADA, FACULTY_BOB, MATH201, PAST_CS, PAST_MATH


def test_group_sets_come_from_edges(container):
    scope = container.scope
    assert scope.groups_for_student(11) == {CS_A}
    assert scope.groups_for_student(15) == set()
    assert scope.groups_for_faculty(FACULTY_ADA) == {CS_A, CS_B}
    assert scope.groups_for_faculty(FACULTY_BOB) == {CS_A}
    assert scope.courses_for_faculty(FACULTY_ADA) == {(CS101, CS_A), (MATH201, CS_B)}


def test_foreign_and_missing_sessions_look_the_same(container):
    scope = container.scope

    with pytest.raises(NotFoundError) as foreign:
        scope.assert_faculty_owns_session(FACULTY_BOB, PAST_CS)
    with pytest.raises(NotFoundError) as missing:
        scope.assert_faculty_owns_session(FACULTY_ADA, 999999)

    assert str(foreign.value) == str(missing.value)
    assert scope.assert_faculty_owns_session(FACULTY_ADA, PAST_CS).session_id == PAST_CS


def test_student_session_membership(container):
    scope = container.scope
    assert scope.assert_student_in_session_group(11, PAST_MATH).session_id == PAST_MATH

    with pytest.raises(ForbiddenError):
        scope.assert_student_in_session_group(14, PAST_CS)
    with pytest.raises(NotFoundError):
        scope.assert_student_in_session_group(11, 999999)


def test_student_course_access(container):
    scope = container.scope
    assert scope.assert_student_course_access(14, MATH201) == {CS_B}
    assert scope.assert_student_course_access(11, MATH201) == {CS_A}

    with pytest.raises(ForbiddenError):
        scope.assert_student_course_access(14, CS101)
    with pytest.raises(ForbiddenError):
        scope.assert_student_course_access(15, CS101)


def test_faculty_reaches_student_only_through_shared_groups(container):
    scope = container.scope
    assert scope.assert_faculty_reaches_student(FACULTY_ADA, 14) == {CS_B}
    assert scope.assert_faculty_reaches_student(FACULTY_BOB, 12) == {CS_A}

    with pytest.raises(ForbiddenError):
        scope.assert_faculty_reaches_student(FACULTY_BOB, 14)
    with pytest.raises(ForbiddenError):
        scope.assert_faculty_reaches_student(FACULTY_ADA, 15)


def test_faculty_teaches(container):
    edge = container.scope.assert_faculty_teaches(FACULTY_ADA, CS101, CS_A)
    assert edge.faculty_id == FACULTY_ADA

    with pytest.raises(ForbiddenError):
        container.scope.assert_faculty_teaches(FACULTY_ADA, MATH201, CS_A)


def test_principal_dispatch(container):
    scope = container.scope
    assert scope.groups_for(FacultyPrincipal(FACULTY_BOB)) == {CS_A}
    assert scope.groups_for(StudentPrincipal(14)) == {CS_B}

    assert scope.assert_principal_sees_session(StudentPrincipal(12), PAST_CS).session_id == PAST_CS
    with pytest.raises(NotFoundError):
        scope.assert_principal_sees_session(FacultyPrincipal(FACULTY_BOB), PAST_CS)
