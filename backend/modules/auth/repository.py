"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the users table.
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import DuplicateEmailError
from .models import UserRecord, UserRole

USERS_TABLE = "users"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user account data access.

    Note: This repository does NOT perform authorization checks.
    The auth service is responsible for scoping writes to the
    session's own user id.
    """

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        result = self._db.table(USERS_TABLE).select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._db.table(USERS_TABLE).select("*").eq("email", email).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def create(self, user: UserRecord) -> UserRecord:
        """
        Insert a new user row.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        data = {
            "id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "password_hash": user.password_hash,
            "role": user.role.value,
            "bio": user.bio,
            "is_active": user.is_active,
        }
        try:
            result = self._db.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            if self.is_unique_violation(e):
                raise DuplicateEmailError()
            raise
        return self._map_to_user(result.data[0])

    def update_profile(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        email: str,
    ) -> UserRecord:
        """
        Update name and email only. Role and password are never touched here.

        Raises:
            DuplicateEmailError: If the email belongs to another account.
        """
        data = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
        }
        try:
            result = (
                self._db.table(USERS_TABLE).update(data).eq("id", user_id).execute()
            )
        except APIError as e:
            if self.is_unique_violation(e):
                raise DuplicateEmailError(
                    "This email address is already in use by another account."
                )
            raise
        return self._map_to_user(result.data[0])

    def delete(self, user_id: str) -> None:
        self._db.table(USERS_TABLE).delete().eq("id", user_id).execute()

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=str(data["id"]),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            email=data["email"],
            password_hash=data.get("password_hash", ""),
            role=UserRole(data.get("role") or UserRole.USER.value),
            bio=data.get("bio"),
            is_active=data.get("is_active", True),
        )
