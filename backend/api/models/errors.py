"""
Error response models.

Standardized error responses for the API.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for any ClassiflowError."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class UpstreamErrorResponse(BaseModel):
    """Body returned when the completions provider rejects a request."""

    error: str
    details: Optional[str] = None
