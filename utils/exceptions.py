# utils/exceptions.py

"""
Application error taxonomy.

Services raise these; the handlers registered in main.py turn them into
``{"error": ..., "message": ...}`` JSON bodies with the matching status code.
Anything that is not an AppError is reported as a generic 500.
"""

from typing import Any, Optional


class AppError(Exception):
    status_code: int = 500
    error: str = "Internal server error"
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.message = message or self.message
        self.error = error or self.error
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body = {"error": self.error, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationFailedError(AppError):
    status_code = 400
    error = "Validation failed"
    message = "Invalid request"


class DuplicateAccountError(AppError):
    status_code = 400
    error = "Registration failed"
    message = "User with this email already exists"


class InvalidCredentialsError(AppError):
    status_code = 401
    error = "Authentication failed"
    message = "Invalid email or password"


class UnauthenticatedError(AppError):
    status_code = 401
    error = "Authentication required"
    message = "You must be logged in"


class EmailNotVerifiedError(AppError):
    status_code = 403
    error = "Authentication failed"
    message = "Email not verified. Please verify your email before logging in."


class ForbiddenError(AppError):
    status_code = 403
    error = "Access denied"
    message = "You are not allowed to perform this action"


class InvalidOrExpiredTokenError(AppError):
    status_code = 400
    error = "Password reset failed"
    message = "Invalid or expired reset token"


class SamePasswordError(AppError):
    status_code = 400
    error = "Password change failed"
    message = "New password must be different from current password"


class InvalidAccountTypeError(AppError):
    status_code = 400
    error = "Invalid account type"
    message = "Account type must be one of: Individual, Business, Creator, None"


class InvalidFederatedTokenError(AppError):
    status_code = 400
    error = "Authentication failed"
    message = "Invalid Google token"


class IdentityProviderUnavailableError(AppError):
    status_code = 500
    error = "Authentication failed"
    message = "Internal server error during Google login"


class NotFoundError(AppError):
    status_code = 404
    error = "Not found"
    message = "Resource not found"


class InternalError(AppError):
    pass
