"""
Base exception classes for the Classiflow backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


FORM_ERROR_KEY = "_form"


class ClassiflowError(Exception):
    """
    Base exception for all Classiflow errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def field_errors(self) -> dict[str, list[str]]:
        """
        Errors keyed by the form field they belong to.

        Errors not tied to a single field are reported under "_form".
        """
        fields = self.details.get("fields")
        if fields:
            return {name: list(messages) for name, messages in fields.items()}
        return {self.field or FORM_ERROR_KEY: [self.message]}


class NotFoundError(ClassiflowError):
    """Resource not found."""

    status_code = 404


class ValidationError(ClassiflowError):
    """Input validation failed."""

    status_code = 422


class AuthenticationError(ClassiflowError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(ClassiflowError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class ConfigurationError(ClassiflowError):
    """A required server-side setting is missing."""

    pass


class ExternalServiceError(ClassiflowError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
