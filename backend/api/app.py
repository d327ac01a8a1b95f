"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import ClassiflowError
from .models.errors import ErrorResponse
from .routes import auth, completions, health, users
from modules.wizard.routes import router as wizard_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    if not settings.jwt_secret:
        logger.warning(
            "JWT_SECRET is not set; login and signup will fail and every "
            "request will be treated as anonymous"
        )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def handle_classiflow_error(request: Request, exc: ClassiflowError) -> JSONResponse:
    """Render any ClassiflowError as {error, message, details}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    body = ErrorResponse(**exc.to_dict())
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Data-classification onboarding API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ClassiflowError, handle_classiflow_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/user", tags=["user"])
    app.include_router(completions.router, prefix="/api/completions", tags=["completions"])
    app.include_router(wizard_router, prefix="/api/organizations", tags=["wizard"])

    return app


# Application instance for uvicorn
app = create_app()
