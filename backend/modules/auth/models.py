"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Account roles. Never assignable through profile edits."""

    USER = "user"
    ADMIN = "admin"


class UserRecord(BaseModel):
    """
    A stored user account, including its password hash.

    Only the repository and the auth service see this model; anything
    returned to clients goes through UserProfile or SessionUser.
    """

    id: str = Field(..., description="User ID (UUID)")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    email: str = Field(..., description="Unique email address")
    password_hash: str = Field(..., description="bcrypt hash")
    role: UserRole = Field(default=UserRole.USER, description="Account role")
    bio: Optional[str] = Field(None, description="Free-text biography")
    is_active: bool = Field(default=True, description="Whether the account is active")

    def to_profile(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role,
            bio=self.bio,
            is_active=self.is_active,
        )

    def to_session_user(self) -> "SessionUser":
        return SessionUser(
            id=self.id,
            email=self.email,
            display_name=f"{self.first_name} {self.last_name}",
        )


class UserProfile(BaseModel):
    """
    Safe user projection returned by get-current-user.

    Always rebuilt from the store, never from token claims.
    """

    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    bio: Optional[str] = None
    is_active: bool = True


class SessionUser(BaseModel):
    """Minimal projection returned after login or signup."""

    id: str
    email: str
    display_name: str = Field(..., alias="displayName")

    model_config = {"frozen": True, "populate_by_name": True}


class TokenClaims(BaseModel):
    """
    Decoded session token payload.

    Carries the identity claims embedded at issuance.
    """

    id: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email at issuance")
    role: UserRole = Field(default=UserRole.USER, description="Role at issuance")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
