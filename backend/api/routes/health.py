"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    sessions: str
    completions: str


def _configured(value: str) -> str:
    return "configured" if value else "not_configured"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the settings each feature needs are present. The
    service is ready once the database and session secret are set.
    """
    settings = get_settings()
    database = _configured(settings.supabase_url and settings.supabase_service_role_key)
    sessions = _configured(settings.jwt_secret)
    ready = database == "configured" and sessions == "configured"
    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        database=database,
        sessions=sessions,
        completions=_configured(settings.openrouter_api_key),
    )
