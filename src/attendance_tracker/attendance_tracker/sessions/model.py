from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import at_clock


@dataclass(frozen=True)
class Session:
    """One scheduled class of a course, taught by a faculty member to a group.

    ``start_time``/``end_time`` are wall-clock ``HH:MM`` strings anchored on ``date``.
    """

    session_id: int
    course_id: int
    faculty_id: int
    group_id: int
    date: date
    start_time: str
    end_time: str
    topic: Optional[str] = None

    @property
    def starts_at(self) -> datetime:
        return at_clock(self.date, self.start_time)

    @property
    def ends_at(self) -> datetime:
        return at_clock(self.date, self.end_time)

    @property
    def time_range(self) -> str:
        return f"{self.start_time} - {self.end_time}"

    def to_dict(self) -> dict:
        return {
            "id": self.session_id,
            "course_id": self.course_id,
            "faculty_id": self.faculty_id,
            "group_id": self.group_id,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "time": self.time_range,
            "topic": self.topic,
        }


def sort_newest_first(sessions) -> list[Session]:
    return sorted(sessions, key=lambda s: (s.date, s.start_time, s.session_id), reverse=True)
