from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    retryable = False


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "authentication_failed"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"


class TokenRejected(DomainError):
    """A scanned payload was not accepted. The actor may re-scan."""

    code = "token_rejected"
    retryable = True


class InvalidFormat(TokenRejected):
    code = "invalid_format"


class TokenNotFound(TokenRejected):
    code = "not_found"


class TokenForged(TokenRejected):
    code = "forged"


class TokenExpired(TokenRejected):
    code = "expired"


class AttendanceError(DomainError):
    """Raised by the attendance recorder; carries the employee it concerns."""

    code = "attendance_error"

    def __init__(self, message: str, *, employee_id: Optional[str] = None):
        super().__init__(message)
        self.employee_id = employee_id


class UnknownEmployee(AttendanceError):
    code = "unknown_employee"


class SettingsMissing(AttendanceError):
    code = "settings_missing"


class AlreadyCompleted(AttendanceError):
    """Today's record is already closed. Informational for the actor."""

    code = "already_completed"


class CheckInConflict(AttendanceError):
    """A concurrent check-in for the same employee and day landed first."""

    code = "check_in_conflict"


class DeviceMismatch(AttendanceError):
    code = "device_mismatch"


class WorkHoursAnomaly(AttendanceError):
    """Check-out time precedes check-in time (clock skew or bad data)."""

    code = "work_hours_anomaly"

    def __init__(self, message: str, *, employee_id: Optional[str] = None, record_id: Optional[int] = None, hours: float = 0.0):
        super().__init__(message, employee_id=employee_id)
        self.record_id = record_id
        self.hours = hours


class PersistenceError(Exception):
    """Infrastructure failure while talking to the database.

    Retrying the whole operation is safe: creates and check-outs are guarded by
    the unique key and the open-record precondition.
    """

    code = "persistence_error"
    retryable = True

    def __init__(self, operation: str, target: str, *, cause: Optional[BaseException] = None):
        super().__init__(f"{operation} failed on {target}" + (f": {cause}" if cause else ""))
        self.operation = operation
        self.target = target
        self.cause = cause
