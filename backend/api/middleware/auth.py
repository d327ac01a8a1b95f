"""
Session authentication dependencies.

Resolves the session cookie to the current user. The user is always
re-read from the store, so a token for a deleted account is treated
like no session at all.
"""

from typing import Optional

from fastapi import Depends, Request

from modules.auth.actions import AuthActions
from modules.auth.exceptions import UnauthenticatedError
from modules.auth.models import UserProfile

from ..dependencies import get_auth_actions


async def get_optional_user(
    request: Request,
    actions: AuthActions = Depends(get_auth_actions),
) -> Optional[UserProfile]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without a session.

    Usage:
        @router.get("/public")
        async def public_route(user: Optional[UserProfile] = Depends(get_optional_user)):
            if user:
                return {"message": f"Hello, {user.email}"}
            return {"message": "Hello, anonymous"}
    """
    return await actions.get_current_user(request)


async def get_current_user(
    user: Optional[UserProfile] = Depends(get_optional_user),
) -> UserProfile:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user. Raises
    UnauthenticatedError (401) when the request has no verified session.

    Usage:
        @router.get("/protected")
        async def protected_route(user: UserProfile = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise UnauthenticatedError()
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
