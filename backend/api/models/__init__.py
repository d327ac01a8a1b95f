"""API models package."""

from .errors import ErrorResponse, UpstreamErrorResponse

__all__ = ["ErrorResponse", "UpstreamErrorResponse"]
