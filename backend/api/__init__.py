"""
Classiflow API package.

Provides the FastAPI application for the data-classification onboarding service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
