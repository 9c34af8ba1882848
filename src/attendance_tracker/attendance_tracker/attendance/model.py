from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from ..common.datetime_utils import iso
from ..core.constants import UNMARKED
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one stored status for a (session, student) pair."""

    attendance_id: int
    session_id: int
    student_id: int
    status: AttendanceStatus
    marked_at: datetime
    location: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "session_id": self.session_id,
            "student_id": self.student_id,
            "status": self.status.value,
            "timestamp": iso(self.marked_at),
            "location": self.location,
        }


@dataclass(frozen=True)
class Recorded:
    status: AttendanceStatus
    timestamp: datetime
    attendance_id: Optional[int] = None

    @property
    def label(self) -> str:
        return self.status.value

    def to_dict(self) -> dict:
        return {"status": self.status.value, "timestamp": iso(self.timestamp)}


@dataclass(frozen=True)
class Unmarked:
    @property
    def label(self) -> str:
        return UNMARKED

    def to_dict(self) -> dict:
        return {"status": UNMARKED, "timestamp": None}


# What a student x session cell looks like once the missing rows are synthesized.
AttendanceView = Union[Recorded, Unmarked]

UNMARKED_VIEW = Unmarked()


def view_of(record: Optional[AttendanceRecord]) -> AttendanceView:
    if record is None:
        return UNMARKED_VIEW
    return Recorded(status=record.status, timestamp=record.marked_at, attendance_id=record.attendance_id)


def index_by_student(records: Iterable[AttendanceRecord]) -> dict[int, AttendanceRecord]:
    return {r.student_id: r for r in records}


def index_by_cell(records: Iterable[AttendanceRecord]) -> dict[tuple[int, int], AttendanceRecord]:
    return {(r.session_id, r.student_id): r for r in records}
