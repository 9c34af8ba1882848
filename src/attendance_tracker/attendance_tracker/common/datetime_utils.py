from __future__ import annotations

from datetime import date, datetime, time

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: str) -> time:
    """Parse a wall-clock ``HH:MM`` string."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def at_clock(day: date, clock: str) -> datetime:
    """Anchor an ``HH:MM`` string on a calendar date."""
    return datetime.combine(day, parse_clock(clock))


def iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def now_local() -> datetime:
    """Current local time; services fall back to it when no clock is injected."""
    return datetime.now()
