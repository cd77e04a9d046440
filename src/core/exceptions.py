"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    PREFERENCES_NOT_FOUND = "PREFERENCES_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    IMMUTABLE_FIELD = "IMMUTABLE_FIELD"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class PreferencesNotFoundError(AppException):
    """Volunteer preferences not set for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PREFERENCES_NOT_FOUND,
            message=f"Preferences not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class RegistrationNotFoundError(AppException):
    """Event registration not found."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.REGISTRATION_NOT_FOUND,
            message=f"Event registration not found: {registration_id}",
            status_code=404,
            details={"registration_id": registration_id},
        )


class ImmutableFieldError(AppException):
    """Attempt to change a field the caller may not edit."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.IMMUTABLE_FIELD,
            message=f"Fields cannot be updated: {', '.join(sorted(fields))}",
            status_code=400,
            details={"fields": sorted(fields)},
        )


class StoreUnavailableError(AppException):
    """The record store failed to complete an operation."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORE_UNAVAILABLE,
            message=reason,
            status_code=503,
        )
