from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ..core.constants import LATE_WEIGHT
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusCounts:
    present: int = 0
    absent: int = 0
    late: int = 0

    @classmethod
    def tally(cls, statuses: Iterable[AttendanceStatus]) -> "StatusCounts":
        present = absent = late = 0
        for status in statuses:
            if status == AttendanceStatus.PRESENT:
                present += 1
            elif status == AttendanceStatus.ABSENT:
                absent += 1
            elif status == AttendanceStatus.LATE:
                late += 1
        return cls(present=present, absent=absent, late=late)

    @property
    def recorded(self) -> int:
        return self.present + self.absent + self.late

    def unmarked_of(self, total_possible: int) -> int:
        return int(total_possible) - self.recorded


def round_half_up(value: float) -> int:
    """``x.5`` rounds up (Python's ``round`` would round to even)."""
    return int(math.floor(value + 0.5))


def format_percent(rate: int) -> str:
    return f"{int(rate)}%"


class RateCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance rates)."""

    @abstractmethod
    def rate(self, counts: StatusCounts, total: int, *, empty_rate: int) -> int:
        raise NotImplementedError


class WeightedRateCalculator(RateCalculator):
    """Standard rule: round((present + 0.5 * late) / total * 100).

    ``empty_rate`` is returned when ``total`` is zero; faculty views pass 0,
    the student dashboard passes 100.
    """

    def __init__(self, late_weight: float = LATE_WEIGHT):
        self._late_weight = late_weight

    def rate(self, counts: StatusCounts, total: int, *, empty_rate: int) -> int:
        if total <= 0:
            return int(empty_rate)
        return round_half_up((counts.present + counts.late * self._late_weight) / total * 100)
