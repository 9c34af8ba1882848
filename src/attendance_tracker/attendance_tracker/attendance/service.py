from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from ..academics.repository import AcademicRepository
from ..common.datetime_utils import now_local
from ..common.validators import parse_status, require_positive_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyMarkedError, DomainError, ForbiddenError, NotFoundError, ValidationError
from ..scope.resolver import ScopeResolver
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .self_mark import SelfMarkPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkOutcome:
    student_id: Optional[int]
    status: Optional[str]
    recorded: bool
    created: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out = {"student_id": self.student_id, "status": self.status, "recorded": self.recorded}
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class BulkMarkResult:
    session_id: int
    outcomes: list[MarkOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[MarkOutcome]:
        return [o for o in self.outcomes if o.recorded]

    @property
    def failed(self) -> list[MarkOutcome]:
        return [o for o in self.outcomes if not o.recorded]

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "recorded": len(self.succeeded),
            "failed": len(self.failed),
            "records": [o.to_dict() for o in self.outcomes],
        }


class AttendanceService:
    """Write path for attendance rows.

    Faculty marking is an upsert keyed on (session, student) and ignores the
    clock. Student self-marking goes through ``SelfMarkPolicy`` and never
    overwrites an existing row.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        academics: AcademicRepository,
        scope: ScopeResolver,
        *,
        policy: Optional[SelfMarkPolicy] = None,
    ):
        self._attendance = attendance
        self._academics = academics
        self._scope = scope
        self._policy = policy or SelfMarkPolicy()

    def _upsert(
        self,
        *,
        session_id: int,
        student_id: int,
        status: AttendanceStatus,
        now: datetime,
    ) -> tuple[AttendanceRecord, bool]:
        existing = self._attendance.get_for_session_and_student(session_id, student_id)
        if existing:
            self._attendance.update_status(attendance_id=existing.attendance_id, status=status, marked_at=now)
            return (
                AttendanceRecord(
                    attendance_id=existing.attendance_id,
                    session_id=session_id,
                    student_id=student_id,
                    status=status,
                    marked_at=now,
                    location=existing.location,
                ),
                False,
            )

        attendance_id = self._attendance.create(
            session_id=session_id,
            student_id=student_id,
            status=status,
            marked_at=now,
        )
        return (
            AttendanceRecord(
                attendance_id=attendance_id,
                session_id=session_id,
                student_id=student_id,
                status=status,
                marked_at=now,
            ),
            True,
        )

    def mark_attendance_bulk(
        self,
        *,
        faculty_id: int,
        session_id: int,
        entries: Iterable[dict],
        now: Optional[datetime] = None,
    ) -> BulkMarkResult:
        """Upsert many (student, status) pairs; one bad entry does not stop the rest."""

        session = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        if not isinstance(entries, (list, tuple)):
            raise ValidationError("attendance_data must be a list")

        now = now or now_local()
        roster = {m.student_id for m in self._academics.memberships(group_ids=[session.group_id])}
        result = BulkMarkResult(session_id=session.session_id)

        for entry in entries:
            raw_student = entry.get("student_id") if isinstance(entry, dict) else None
            raw_status = entry.get("status") if isinstance(entry, dict) else None
            try:
                student_id = require_positive_int(raw_student, "student_id")
                status = parse_status(raw_status)
                if student_id not in roster:
                    raise ForbiddenError("Student is not in this session's group")
                _, created = self._upsert(session_id=session.session_id, student_id=student_id, status=status, now=now)
            except DomainError as exc:
                # StorageError included: rows already written stay committed.
                result.outcomes.append(
                    MarkOutcome(
                        student_id=raw_student,
                        status=str(raw_status) if raw_status is not None else None,
                        recorded=False,
                        error=str(exc),
                    )
                )
                continue
            result.outcomes.append(MarkOutcome(student_id=student_id, status=status.value, recorded=True, created=created))

        logger.info(
            "Bulk mark session=%s faculty=%s recorded=%s failed=%s",
            session.session_id,
            faculty_id,
            len(result.succeeded),
            len(result.failed),
        )
        return result

    def mark_attendance_single(
        self,
        *,
        faculty_id: int,
        session_id: int,
        student_id: int,
        status,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        session_id = require_positive_int(session_id, "session_id")
        session = self._scope.assert_faculty_owns_session(faculty_id, session_id)
        student_id = require_positive_int(student_id, "student_id")
        status = parse_status(status)

        members = {m.student_id for m in self._academics.memberships(group_ids=[session.group_id])}
        if student_id not in members:
            raise ForbiddenError("Student is not in this session's group")

        record, created = self._upsert(
            session_id=session.session_id,
            student_id=student_id,
            status=status,
            now=now or now_local(),
        )
        logger.info(
            "Marked session=%s student=%s status=%s (%s)",
            session.session_id,
            student_id,
            status.value,
            "created" if created else "updated",
        )
        return record

    def get_record(self, *, faculty_id: int, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        self._scope.assert_faculty_owns_session(faculty_id, record.session_id)
        return record

    def update_record(
        self,
        *,
        faculty_id: int,
        attendance_id: int,
        status,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        status = parse_status(status)
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")

        try:
            self._scope.assert_faculty_owns_session(faculty_id, record.session_id)
        except NotFoundError:
            raise ForbiddenError("Access denied to this attendance record")

        now = now or now_local()
        self._attendance.update_status(attendance_id=record.attendance_id, status=status, marked_at=now)
        logger.info("Updated attendance %s -> %s", record.attendance_id, status.value)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            session_id=record.session_id,
            student_id=record.student_id,
            status=status,
            marked_at=now,
            location=record.location,
        )

    def self_mark_attendance(
        self,
        *,
        student_id: int,
        session_id: int,
        location: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        session_id = require_positive_int(session_id, "session_id")
        session = self._scope.assert_student_in_session_group(student_id, session_id)

        existing = self._attendance.get_for_session_and_student(session.session_id, int(student_id))
        if existing:
            raise AlreadyMarkedError(existing.status)

        now = now or now_local()
        status = self._policy.decide(session, now)

        # A concurrent duplicate surfaces here as DuplicateRecordError from the unique index.
        attendance_id = self._attendance.create(
            session_id=session.session_id,
            student_id=int(student_id),
            status=status,
            marked_at=now,
            location=(location or None),
        )
        logger.info("Self-mark session=%s student=%s status=%s", session.session_id, student_id, status.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            session_id=session.session_id,
            student_id=int(student_id),
            status=status,
            marked_at=now,
            location=(location or None),
        )
