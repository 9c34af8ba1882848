from __future__ import annotations

from ..academics.model import GroupCourse
from ..academics.repository import AcademicRepository
from ..core.exceptions import ForbiddenError, NotFoundError
from ..core.principal import FacultyPrincipal, Principal, StudentPrincipal
from ..sessions.model import Session
from ..sessions.repository import SessionRepository


class ScopeResolver:
    """Answers "may this principal touch that entity?" with read-only queries.

    Every service calls into this before deriving stats or mutating records,
    so a scope failure surfaces before any partial result is computed.
    """

    def __init__(self, academics: AcademicRepository, sessions: SessionRepository):
        self._academics = academics
        self._sessions = sessions

    def groups_for_student(self, student_id: int) -> set[int]:
        return {m.group_id for m in self._academics.memberships(student_id=int(student_id))}

    def groups_for_faculty(self, faculty_id: int) -> set[int]:
        return {e.group_id for e in self._academics.teaching_edges(faculty_id=int(faculty_id))}

    def courses_for_faculty(self, faculty_id: int) -> set[tuple[int, int]]:
        """``(course_id, group_id)`` pairs straight from the teaching edges."""
        return {(e.course_id, e.group_id) for e in self._academics.teaching_edges(faculty_id=int(faculty_id))}

    def groups_for(self, principal: Principal) -> set[int]:
        if isinstance(principal, FacultyPrincipal):
            return self.groups_for_faculty(principal.faculty_id)
        if isinstance(principal, StudentPrincipal):
            return self.groups_for_student(principal.student_id)
        raise TypeError(f"Unsupported principal: {principal!r}")

    def assert_faculty_owns_session(self, faculty_id: int, session_id: int) -> Session:
        # One message for "missing" and "someone else's" so ids cannot be probed.
        session = self._sessions.get_for_faculty(int(session_id), int(faculty_id))
        if not session:
            raise NotFoundError("Session not found or access denied")
        return session

    def assert_student_in_session_group(self, student_id: int, session_id: int) -> Session:
        session = self._sessions.get_by_id(int(session_id))
        if not session:
            raise NotFoundError("Session not found")
        if session.group_id not in self.groups_for_student(student_id):
            raise ForbiddenError("You do not belong to this session")
        return session

    def assert_student_course_access(self, student_id: int, course_id: int) -> set[int]:
        """Returns the student's groups that take ``course_id``."""

        groups = self.groups_for_student(student_id)
        edges = self._academics.teaching_edges(course_id=int(course_id), group_ids=groups) if groups else []
        if not edges:
            raise ForbiddenError("Access denied to this course")
        return {e.group_id for e in edges}

    def assert_faculty_teaches(self, faculty_id: int, course_id: int, group_id: int) -> GroupCourse:
        edges = self._academics.teaching_edges(
            faculty_id=int(faculty_id),
            course_id=int(course_id),
            group_ids=[int(group_id)],
        )
        if not edges:
            raise ForbiddenError("You do not have access to this course or group")
        return edges[0]

    def assert_faculty_reaches_student(self, faculty_id: int, student_id: int) -> set[int]:
        """Groups shared by the faculty's teaching edges and the student's memberships."""

        shared = self.groups_for_faculty(faculty_id) & self.groups_for_student(student_id)
        if not shared:
            raise ForbiddenError("Access denied to this student")
        return shared

    def assert_principal_sees_session(self, principal: Principal, session_id: int) -> Session:
        if isinstance(principal, FacultyPrincipal):
            return self.assert_faculty_owns_session(principal.faculty_id, session_id)
        if isinstance(principal, StudentPrincipal):
            return self.assert_student_in_session_group(principal.student_id, session_id)
        raise TypeError(f"Unsupported principal: {principal!r}")
