"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory stores standing in for Supabase, deterministic settings and a
TestClient wired to them.
"""

import copy
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import ServiceContainer, reset_container, set_container
from modules.auth.exceptions import DuplicateEmailError
from modules.auth.models import UserRecord, UserRole
from modules.auth.passwords import PasswordHasher
from modules.auth.tokens import SessionTokenCodec
from modules.wizard.models import Step2Result
from shared.config import Settings


# Test signing secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Lowest bcrypt cost, keeps the suite fast
TEST_BCRYPT_ROUNDS = 4

TEST_PASSWORD = "correct-horse-battery"


class FakeUserRepository:
    """In-memory IUserRepository with the store's unique-email rule."""

    def __init__(self) -> None:
        self.users: dict[str, UserRecord] = {}
        self.writes = 0
        self.deleted: list[str] = []

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create(self, user: UserRecord) -> UserRecord:
        if self.get_by_email(user.email) is not None:
            raise DuplicateEmailError()
        self.writes += 1
        self.users[user.id] = user
        return user

    def update_profile(
        self, user_id: str, first_name: str, last_name: str, email: str
    ) -> UserRecord:
        other = self.get_by_email(email)
        if other is not None and other.id != user_id:
            raise DuplicateEmailError(
                "This email address is already in use by another account."
            )
        self.writes += 1
        updated = self.users[user_id].model_copy(
            update={"first_name": first_name, "last_name": last_name, "email": email}
        )
        self.users[user_id] = updated
        return updated

    def delete(self, user_id: str) -> None:
        self.writes += 1
        self.deleted.append(user_id)
        self.users.pop(user_id, None)


class FakeStepRepository:
    """In-memory stand-in for StepRepository (organizations.result)."""

    def __init__(self, organizations: Optional[dict[str, dict[str, Any]]] = None):
        self.organizations: dict[str, dict[str, Any]] = organizations or {}

    def get_result(self, organization_id: str) -> Optional[dict[str, Any]]:
        if organization_id not in self.organizations:
            return None
        return copy.deepcopy(self.organizations[organization_id])

    def save_step(
        self, organization_id: str, step_key: str, payload: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        if organization_id not in self.organizations:
            return None
        self.organizations[organization_id][step_key] = payload
        return {"id": organization_id, "result": copy.deepcopy(self.organizations[organization_id])}


class RecordingPersistence:
    """IStepPersistence that records every save, optionally failing."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: list[tuple[str, Step2Result]] = []
        self.error = error

    async def save_second_step(self, organization_id: str, result: Step2Result) -> dict[str, Any]:
        self.calls.append((organization_id, result))
        if self.error is not None:
            raise self.error
        return {"id": organization_id, "step2": result.model_dump(mode="json", by_alias=True)}


def make_user(
    user_id: str = "user-123",
    email: str = "ada@example.com",
    password: str = TEST_PASSWORD,
    role: UserRole = UserRole.USER,
    first_name: str = "Ada",
    last_name: str = "Lovelace",
) -> UserRecord:
    """Build a stored user with a real bcrypt hash."""
    return UserRecord(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=PasswordHasher(rounds=TEST_BCRYPT_ROUNDS).hash(password),
        role=role,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Deterministic settings; nothing is read from a live environment."""
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        environment="test",
        supabase_url="",
        supabase_service_role_key="",
        openrouter_api_key="test-openrouter-key",
    )


@pytest.fixture
def token_codec() -> SessionTokenCodec:
    return SessionTokenCodec(secret=TEST_JWT_SECRET)


@pytest.fixture
def fake_users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def fake_steps() -> FakeStepRepository:
    return FakeStepRepository({"org-1": {}})


@pytest.fixture
def stored_user(fake_users: FakeUserRepository) -> UserRecord:
    """A user already present in the fake store."""
    user = make_user()
    fake_users.users[user.id] = user
    return user


@pytest.fixture
def container(test_settings, fake_users, fake_steps):
    """Install a service container wired to the in-memory stores."""
    container = ServiceContainer(
        settings=test_settings,
        user_repository=fake_users,
        step_repository=fake_steps,
    )
    set_container(container)
    yield container
    reset_container()


@pytest.fixture
def client(container) -> TestClient:
    """TestClient that does not follow redirects, so 303s can be asserted."""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def logged_in_client(client: TestClient, stored_user: UserRecord) -> TestClient:
    """Client holding a session cookie for stored_user."""
    response = client.post(
        "/api/auth/login",
        data={"email": stored_user.email, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return client
