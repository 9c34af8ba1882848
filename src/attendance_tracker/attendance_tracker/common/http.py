from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AlreadyMarkedError,
    AuthenticationError,
    DomainError,
    DuplicateRecordError,
    ForbiddenError,
    NotFoundError,
    SessionEndedError,
    SessionNotStartedError,
    StorageError,
    ValidationError,
)
from ..core.principal import FacultyPrincipal, StudentPrincipal, principal_from_session

logger = logging.getLogger(__name__)

# Checked in order, so subclasses must come before their bases.
_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (AlreadyMarkedError, 409),
    (DuplicateRecordError, 409),
    (SessionNotStartedError, 400),
    (SessionEndedError, 400),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (StorageError, 500),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def error_response(message: str, status: int, /, **extra):
    return jsonify({"error": message, **extra}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if isinstance(error, StorageError):
            logger.error("Storage failure during %s", error.operation or request.path, exc_info=error)
            return error_response("Internal server error", 500)
        if isinstance(error, AlreadyMarkedError):
            status_value = getattr(error.status, "value", error.status)
            return error_response(str(error), status, status=status_value)
        return error_response(str(error), status)

    @app.errorhandler(404)
    def handle_not_found(_error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_error):
        return error_response("Method not allowed", 405)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_principal():
    return principal_from_session(
        {"role": session.get("role"), "user_id": session.get("user_id")}
    )


def _role_required(role: Role, expected: type):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Authentication required", 401)
            principal = current_principal()
            if not isinstance(principal, expected):
                return error_response(f"Access restricted to {role.value} accounts", 403)
            return view(principal, *args, **kwargs)

        return wrapper

    return decorator


def faculty_required(view):
    """Inject the logged-in ``FacultyPrincipal`` as the view's first argument."""
    return _role_required(Role.FACULTY, FacultyPrincipal)(view)


def student_required(view):
    """Inject the logged-in ``StudentPrincipal`` as the view's first argument."""
    return _role_required(Role.STUDENT, StudentPrincipal)(view)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Authentication required", 401)
        return view(current_principal(), *args, **kwargs)

    return wrapper
