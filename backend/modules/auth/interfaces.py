"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service itself depends on IUserRepository, so the credential store can
be swapped for an in-memory fake in tests.
"""

from typing import Protocol, Optional, runtime_checkable

from .forms import CreateAccountForm, LoginForm, ProfileForm
from .models import UserProfile, UserRecord


@runtime_checkable
class IUserRepository(Protocol):
    """
    Contract for the credential store.

    Email uniqueness is enforced by the store; implementations must raise
    DuplicateEmailError when a write would violate it.
    """

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create(self, user: UserRecord) -> UserRecord:
        ...

    def update_profile(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        email: str,
    ) -> UserRecord:
        ...

    def delete(self, user_id: str) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def login(self, form: LoginForm) -> tuple[UserRecord, str]:
        """
        Check credentials and issue a session token.

        Returns:
            The authenticated account and its signed session token

        Raises:
            UserNotFoundError: If no account has this email
            InvalidCredentialsError: If the password does not match
        """
        ...

    async def create_account(self, form: CreateAccountForm) -> tuple[UserRecord, str]:
        """
        Register a new account and issue a session token.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def get_current_user(self, token: Optional[str]) -> Optional[UserProfile]:
        """
        Resolve a session token to the user's current profile.

        Returns:
            UserProfile if the token verifies and the user still exists,
            None otherwise. Never raises for bad tokens.
        """
        ...

    async def update_profile(self, user_id: str, form: ProfileForm) -> UserProfile:
        """
        Update the name and email of the given account.

        Raises:
            DuplicateEmailError: If the new email belongs to another account
        """
        ...

    async def delete_account(self, user_id: str) -> None:
        """Permanently delete the given account."""
        ...
