from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when an entity does not exist or is not visible to the caller."""


class ForbiddenError(DomainError):
    """Raised when a principal reaches outside its group/course scope."""


class AlreadyMarkedError(DomainError):
    """Raised on a second self-mark; carries the status already recorded."""

    def __init__(self, status, message: str = "Attendance already marked"):
        super().__init__(message)
        self.status = status


class SessionNotStartedError(DomainError):
    """Self-mark attempted before the session starts."""


class SessionEndedError(DomainError):
    """Self-mark attempted after the closing grace period."""


class DuplicateRecordError(DomainError):
    """Raised when a create hits a uniqueness constraint."""


class StorageError(DomainError):
    """Wraps a persistence driver failure.

    The driver exception is chained as ``__cause__`` for logging; ``str(self)``
    stays generic so it can be shown to callers.
    """

    def __init__(self, message: str = "Storage failure", *, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
