from __future__ import annotations

import re

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str, field_name: str = "Email") -> str:
    value = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(value):
        raise ValidationError(f"{field_name} is not a valid email address")
    return value


def require_positive_int(value, field_name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def parse_status(value) -> AttendanceStatus:
    """Accept only statuses that may be stored (``unmarked`` is synthesized, never written)."""
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r} (expected one of: {allowed})")
