"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses. Each one
knows the form field it belongs to, so the auth actions can report it
next to the relevant input.
"""

from shared.exceptions import (
    ClassiflowError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no session token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class UnauthenticatedError(AuthenticationError):
    """Raised when a mutating action is attempted without a verified session."""

    def __init__(self, message: str = "You must be logged in."):
        super().__init__(message, code="UNAUTHENTICATED")


class FormValidationError(ValidationError):
    """Raised when submitted form fields are malformed."""

    def __init__(self, fields: dict[str, list[str]]):
        super().__init__(
            "Invalid form data",
            code="VALIDATION_ERROR",
            details={"fields": fields},
        )


class UserNotFoundError(NotFoundError):
    """Raised when no account matches the given email."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND", field="email")


class InvalidCredentialsError(AuthenticationError):
    """Raised when the password does not match the stored hash."""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message, code="INVALID_CREDENTIALS", field="password")


class DuplicateEmailError(ValidationError):
    """Raised when an email is already registered to another account."""

    status_code = 409

    def __init__(self, message: str = "A user with this email already exists"):
        super().__init__(message, code="DUPLICATE_EMAIL", field="email")


class UnexpectedError(ClassiflowError):
    """Catch-all for failures the user cannot fix."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, code="UNEXPECTED_ERROR")
