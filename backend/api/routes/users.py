"""
User data endpoint.

GET / POST / DELETE on the current user. POST only echoes the merged
projection back; profile edits go through the auth profile action.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from modules.auth.cookies import SessionCookieManager
from modules.auth.interfaces import IAuthService
from modules.auth.models import UserProfile

from ..dependencies import get_auth_service, get_cookie_manager
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("", response_model=UserProfile)
async def get_user(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return user


@router.post("")
async def echo_user(
    body: dict[str, Any] = Body(...),
    user: UserProfile = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Return the current profile with the submitted fields merged in.

    Nothing is written.
    """
    return {**user.model_dump(mode="json"), **body}


@router.delete("")
async def delete_user(
    response: Response,
    user: UserProfile = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
    cookies: SessionCookieManager = Depends(get_cookie_manager),
) -> dict[str, str]:
    """
    Delete the current user's account and end the session.

    Requires authentication.
    """
    await service.delete_account(user.id)
    cookies.clear(response)
    return {"message": "Account deleted successfully"}
