"""
Custom exceptions and error handling for Studio Functions.

Defines application-specific exceptions with error codes for consistent
error handling across Lambda functions and client communication.

Usage:
    from core.errors import UpstreamQueryError, ErrorCode

    raise UpstreamQueryError("confirm_booking failed", code=ErrorCode.CONFIRMATION_FAILED)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Configuration errors
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"

    # Authentication errors
    SIGNATURE_MISSING = "SIGNATURE_MISSING"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Lookup errors
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"

    # Store errors
    QUERY_FAILED = "QUERY_FAILED"
    CONFIRMATION_FAILED = "CONFIRMATION_FAILED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CONFIGURATION_MISSING: "The service is not configured. Please contact the studio.",
    ErrorCode.SIGNATURE_MISSING: "Missing webhook signature.",
    ErrorCode.INVALID_SIGNATURE: "Webhook signature verification failed.",
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.INVALID_REQUEST: "Invalid request format. Please try again.",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found.",
    ErrorCode.QUERY_FAILED: "Unable to read booking records. Please try again.",
    ErrorCode.CONFIRMATION_FAILED: "Booking could not be confirmed. Please try again.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class StudioError(Exception):
    """Base exception for all Studio Functions errors."""

    status_code: int = 500

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class ConfigurationError(StudioError):
    """A required secret or setting is absent. Fatal, never retried."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.CONFIGURATION_MISSING):
        super().__init__(message, code)


class AuthenticationError(StudioError):
    """Webhook signature missing or not matching the raw body."""

    status_code = 401

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_SIGNATURE):
        super().__init__(message, code)


class ValidationError(StudioError):
    """Required input field missing or malformed."""

    status_code = 400

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(message, code)


class NotFoundError(StudioError):
    """Referenced record does not exist."""

    status_code = 404

    def __init__(self, message: str, code: ErrorCode = ErrorCode.BOOKING_NOT_FOUND):
        super().__init__(message, code)


class UpstreamQueryError(StudioError):
    """A query or procedure call against the hosted store failed."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.QUERY_FAILED):
        super().__init__(message, code)
