"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ApiError(AppError):
    """
    Raised for any failed call to the remote service.

    Covers unreachable service, non-success status and malformed bodies.
    The message is always ready to show to the user.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code="API_ERROR")
        self.status = status


class ValidationError(AppError):
    """Raised when client-side input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
