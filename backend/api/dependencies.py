"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests build a container around in-memory stores and install it with
set_container(), so no route ever needs a live database.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.actions import AuthActions
    from modules.auth.cookies import SessionCookieManager
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.wizard.interfaces import IWizardService
    from modules.wizard.repository import StepRepository
    from providers.openrouter import OpenRouterClient


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Stores can be passed in to replace the
    Supabase-backed defaults.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        user_repository: "Optional[IUserRepository]" = None,
        step_repository: "Optional[StepRepository]" = None,
    ) -> None:
        self._settings = settings
        self._user_repository = user_repository
        self._step_repository = step_repository
        self._auth_service: "IAuthService | None" = None
        self._auth_actions: "AuthActions | None" = None
        self._cookies: "SessionCookieManager | None" = None
        self._wizard_service: "IWizardService | None" = None
        self._openrouter: "OpenRouterClient | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user store."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def step_repository(self) -> "StepRepository":
        """Get the wizard step store."""
        if self._step_repository is None:
            from modules.wizard.repository import StepRepository
            from shared.database import get_supabase_client
            self._step_repository = StepRepository(get_supabase_client())
        return self._step_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.passwords import PasswordHasher
            from modules.auth.service import AuthService
            from modules.auth.tokens import SessionTokenCodec
            settings = self.settings
            self._auth_service = AuthService(
                users=self.user_repository,
                hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
                tokens=SessionTokenCodec(
                    secret=settings.jwt_secret,
                    algorithm=settings.jwt_algorithm,
                    ttl=settings.session_ttl,
                ),
            )
        return self._auth_service

    @property
    def cookies(self) -> "SessionCookieManager":
        """Get the session cookie manager."""
        if self._cookies is None:
            from modules.auth.cookies import SessionCookieManager
            settings = self.settings
            self._cookies = SessionCookieManager(
                name=settings.session_cookie_name,
                max_age=settings.session_max_age_seconds,
                secure=settings.is_production,
            )
        return self._cookies

    @property
    def auth_actions(self) -> "AuthActions":
        """Get the auth form actions."""
        if self._auth_actions is None:
            from modules.auth.actions import AuthActions
            self._auth_actions = AuthActions(
                service=self.auth,
                cookies=self.cookies,
                login_path=self.settings.login_path,
                post_delete_path=self.settings.post_delete_path,
            )
        return self._auth_actions

    @property
    def wizard(self) -> "IWizardService":
        """Get the wizard service instance."""
        if self._wizard_service is None:
            from modules.wizard.service import WizardService
            self._wizard_service = WizardService(self.step_repository)
        return self._wizard_service

    @property
    def openrouter(self) -> "OpenRouterClient":
        """Get the OpenRouter client."""
        if self._openrouter is None:
            from providers.openrouter import OpenRouterClient
            settings = self.settings
            self._openrouter = OpenRouterClient(
                api_key=settings.openrouter_api_key,
                api_base=settings.openrouter_api_base,
                model=settings.openrouter_model,
                system_prompt=settings.openrouter_system_prompt,
            )
        return self._openrouter

    def reset(self) -> None:
        """
        Reset all cached services.

        Injected stores are kept; everything built from them is rebuilt.
        """
        self._auth_service = None
        self._auth_actions = None
        self._cookies = None
        self._wizard_service = None
        self._openrouter = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (used by tests)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_auth_actions() -> "AuthActions":
    """FastAPI dependency for auth form actions."""
    return get_container().auth_actions


def get_wizard_service() -> "IWizardService":
    """FastAPI dependency for wizard service."""
    return get_container().wizard


def get_openrouter_client() -> "OpenRouterClient":
    """FastAPI dependency for the OpenRouter client."""
    return get_container().openrouter


def get_cookie_manager() -> "SessionCookieManager":
    """FastAPI dependency for the session cookie manager."""
    return get_container().cookies
