"""
Centralized configuration for the Classiflow backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, OPENROUTER_*).
"""

from datetime import timedelta
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Classiflow API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Sessions
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "auth-token"
    session_max_age_seconds: int = 60 * 60 * 24 * 7  # 7 days
    bcrypt_rounds: int = 10

    # Redirect targets for the auth actions
    login_path: str = "/login"
    post_delete_path: str = "/"

    # OpenRouter (policy generation proxy)
    openrouter_api_key: str = ""
    openrouter_api_base: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "meta-llama/llama-3-8b-instruct"
    openrouter_system_prompt: str = (
        "You are an expert at writing professional policy documents."
    )

    @property
    def session_ttl(self) -> timedelta:
        """Lifetime of a session token; matches the cookie max-age."""
        return timedelta(seconds=self.session_max_age_seconds)

    @property
    def is_production(self) -> bool:
        """Whether cookies must carry the secure flag."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
