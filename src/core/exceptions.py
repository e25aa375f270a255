"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    JOIN_CODE_EXHAUSTED = "JOIN_CODE_EXHAUSTED"


class AppException(Exception):
    """Base application exception.

    ``message`` is display-ready: the client shows it verbatim.
    """

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
    """No authenticated user is available."""

    def __init__(
        self,
        message: str = "No user found",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ProfileNotFoundError(AppException):
    """The authenticated user has no profile row."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"user_id": user_id},
        )


class GroupNotFoundError(AppException):
    """Group not found."""

    def __init__(self, reference: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_NOT_FOUND,
            message=f"Group not found: {reference}",
            status_code=404,
            details={"group": reference},
        )


class StoreError(AppException):
    """A lookup or insert against the record store failed.

    Wraps driver errors, network failures and constraint violations alike.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=500,
            details={"operation": operation} if operation else None,
        )


class JoinCodeExhaustedError(AppException):
    """Every generated join code collided with an existing group."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            error_code=ErrorCode.JOIN_CODE_EXHAUSTED,
            message=f"Could not generate a unique join code after {attempts} attempts",
            status_code=503,
            details={"attempts": attempts},
        )
