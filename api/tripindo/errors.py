"""
Custom exceptions and error codes for Trip Indo.

Every error carries an ErrorCode and the HTTP status the API answers with.
The exception handlers in main.py render them as {"error": ..., "code": ...}.

Usage:
    from tripindo.errors import InvitationStateError

    raise InvitationStateError("Invitation has already been accepted")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Authentication errors
    AUTH_FAILED = "AUTH_FAILED"
    INVALID_TOKEN = "INVALID_TOKEN"
    SESSION_EXPIRED = "SESSION_EXPIRED"

    # Access errors
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Domain errors
    INVALID_BUDGET = "INVALID_BUDGET"
    INVITATION_ALREADY_DECIDED = "INVITATION_ALREADY_DECIDED"
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # System errors
    BACKEND_ERROR = "BACKEND_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TripIndoError(Exception):
    """Base exception for all Trip Indo errors."""

    status_code: int = 500
    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)


class AuthenticationError(TripIndoError):
    """Missing, invalid or revoked credentials."""

    status_code = 401
    default_code = ErrorCode.AUTH_FAILED


class PermissionDeniedError(TripIndoError):
    """Authenticated, but not allowed to act on the resource."""

    status_code = 403
    default_code = ErrorCode.FORBIDDEN


class NotFoundError(TripIndoError):
    status_code = 404
    default_code = ErrorCode.NOT_FOUND


class ConflictError(TripIndoError):
    status_code = 409
    default_code = ErrorCode.CONFLICT


class ValidationError(TripIndoError):
    """Input rejected before any write."""

    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR


class InvalidBudgetError(TripIndoError):
    """Budget statistics requested for a non-positive budget."""

    status_code = 422
    default_code = ErrorCode.INVALID_BUDGET


class InvitationStateError(TripIndoError):
    """Transition attempted on an invitation that is no longer pending."""

    status_code = 409
    default_code = ErrorCode.INVITATION_ALREADY_DECIDED


class EmailDeliveryError(TripIndoError):
    """The email provider could not be reached or rejected the message."""

    status_code = 500
    default_code = ErrorCode.EMAIL_DELIVERY_FAILED
