"""
Authentication service implementation.

Checks credentials against the user store, issues session tokens and
resolves them back to users. Knows nothing about HTTP; see actions.py
for the cookie-aware layer.
"""

import logging
import uuid
from typing import Optional

from shared.exceptions import AuthenticationError

from .forms import CreateAccountForm, LoginForm, ProfileForm
from .interfaces import IAuthService, IUserRepository
from .models import UserProfile, UserRecord, UserRole
from .passwords import PasswordHasher
from .tokens import SessionTokenCodec
from .exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Sessions are stateless: the signed token is the whole session, and
    every lookup re-resolves the user from the store by the token's id.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        tokens: SessionTokenCodec,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def login(self, form: LoginForm) -> tuple[UserRecord, str]:
        user = self._users.get_by_email(form.email)
        if user is None:
            raise UserNotFoundError()

        if not self._hasher.verify(form.password, user.password_hash):
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return user, self.issue_token(user)

    async def create_account(self, form: CreateAccountForm) -> tuple[UserRecord, str]:
        if self._users.get_by_email(form.email) is not None:
            raise DuplicateEmailError()

        record = UserRecord(
            id=str(uuid.uuid4()),
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
            password_hash=self._hasher.hash(form.password),
            role=UserRole.USER,
        )
        # The store's unique constraint still catches a concurrent signup
        user = self._users.create(record)

        logger.info(f"Created account {user.id}")
        return user, self.issue_token(user)

    def issue_token(self, user: UserRecord) -> str:
        return self._tokens.issue(user)

    async def get_current_user(self, token: Optional[str]) -> Optional[UserProfile]:
        try:
            claims = self._tokens.verify(token)
        except AuthenticationError as e:
            if token:
                logger.debug(f"Rejected session token: {e.code}")
            return None

        user = self._users.get_by_id(claims.id)
        if user is None:
            logger.debug(f"Session token for missing user {claims.id}")
            return None
        return user.to_profile()

    async def update_profile(self, user_id: str, form: ProfileForm) -> UserProfile:
        user = self._users.update_profile(
            user_id,
            first_name=form.first_name,
            last_name=form.last_name,
            email=form.email,
        )
        logger.info(f"Updated profile for user {user_id}")
        return user.to_profile()

    async def delete_account(self, user_id: str) -> None:
        self._users.delete(user_id)
        logger.info(f"Deleted account {user_id}")
