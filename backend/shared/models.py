"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field

from .exceptions import ClassiflowError, FORM_ERROR_KEY


class ActionResult(BaseModel):
    """
    Structured outcome of a form action.

    Actions never let failures escape to the caller; they report them
    here instead, keyed by the form field they relate to.
    """

    success: bool = Field(..., description="Whether the action completed")
    errors: Optional[dict[str, list[str]]] = Field(
        None, description="Field name (or '_form') to error messages"
    )
    user: Optional[Any] = Field(None, description="User projection on success")

    @classmethod
    def ok(cls, user: Any = None) -> "ActionResult":
        return cls(success=True, user=user)

    @classmethod
    def from_error(cls, error: ClassiflowError) -> "ActionResult":
        return cls(success=False, errors=error.field_errors())

    @classmethod
    def form_error(cls, message: str) -> "ActionResult":
        return cls(success=False, errors={FORM_ERROR_KEY: [message]})
