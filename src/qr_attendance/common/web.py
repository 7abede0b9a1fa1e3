from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AlreadyCompleted,
    AuthenticationError,
    AuthorizationError,
    CheckInConflict,
    DeviceMismatch,
    DomainError,
    InvalidFormat,
    PersistenceError,
    SettingsMissing,
    TokenExpired,
    TokenForged,
    TokenNotFound,
    UnknownEmployee,
    ValidationError,
    WorkHoursAnomaly,
)
from ..employees.session import SessionContext, can_view

logger = logging.getLogger(__name__)

SESSION_KEY = "ctx"

_STATUS_BY_ERROR = [
    (InvalidFormat, 400),
    (TokenNotFound, 404),
    (TokenForged, 400),
    (TokenExpired, 410),
    (UnknownEmployee, 404),
    (SettingsMissing, 503),
    (AlreadyCompleted, 409),
    (CheckInConflict, 409),
    (DeviceMismatch, 403),
    (WorkHoursAnomaly, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
]


def current_session() -> Optional[SessionContext]:
    return SessionContext.from_dict(session.get(SESSION_KEY))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            return jsonify({"success": False, "code": "login_required", "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def require_screen(screen_key: str):
    """Allow the view only for actors that can see ``screen_key``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = current_session()
            if ctx is None:
                return jsonify({"success": False, "code": "login_required", "message": "Please log in to continue"}), 401
            if not can_view(ctx, screen_key):
                return jsonify({"success": False, "code": "forbidden", "message": "You do not have access to this screen"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return (
            jsonify({"success": False, "code": e.code, "message": str(e), "retryable": e.retryable}),
            status_for(e),
        )

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e: PersistenceError):
        logger.error("persistence failure during %s on %s", e.operation, e.target)
        message = "The database is temporarily unavailable. Please try again."
        if app.config.get("DEBUG"):
            message = str(e)
        return jsonify({"success": False, "code": e.code, "message": message, "retryable": True}), 503

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error")
        return jsonify({"success": False, "code": "internal_error", "message": "Unexpected server error"}), 500
