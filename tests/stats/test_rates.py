from __future__ import annotations

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.stats.calculator import StatusCounts, WeightedRateCalculator, format_percent, round_half_up


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(66.666) == 67
    assert round_half_up(33.333) == 33


def test_weighted_rate():
    calc = WeightedRateCalculator()
    assert calc.rate(StatusCounts(present=2, absent=1), 3, empty_rate=0) == 67
    assert calc.rate(StatusCounts(late=1), 1, empty_rate=0) == 50
    assert calc.rate(StatusCounts(present=1, late=1), 2, empty_rate=0) == 75


def test_empty_rate_is_caller_policy():
    calc = WeightedRateCalculator()
    assert calc.rate(StatusCounts(), 0, empty_rate=0) == 0
    assert calc.rate(StatusCounts(), 0, empty_rate=100) == 100


def test_tally_and_unmarked():
    counts = StatusCounts.tally(
        [AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.LATE, AttendanceStatus.ABSENT]
    )
    assert (counts.present, counts.absent, counts.late) == (1, 1, 2)
    assert counts.unmarked_of(6) == 2
    assert format_percent(67) == "67%"
