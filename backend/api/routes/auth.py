"""
Auth form action endpoints.

Each endpoint takes form-encoded fields and answers with an ActionResult
({success, errors?, user?}); logout and delete answer with a redirect.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from modules.auth.actions import AuthActions
from modules.auth.models import UserProfile
from shared.models import ActionResult

from ..dependencies import get_auth_actions
from ..middleware.auth import get_optional_user

router = APIRouter()


async def _form_fields(request: Request) -> dict[str, str]:
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _action_failure(result: ActionResult) -> JSONResponse:
    return JSONResponse(status_code=500, content=result.model_dump(mode="json", by_alias=True))


@router.post("/login", response_model=ActionResult)
async def login(
    request: Request,
    response: Response,
    actions: AuthActions = Depends(get_auth_actions),
) -> ActionResult:
    """
    Log in with email and password.

    Sets the session cookie on success.
    """
    return await actions.login(await _form_fields(request), response)


@router.post("/signup", response_model=ActionResult)
async def signup(
    request: Request,
    response: Response,
    actions: AuthActions = Depends(get_auth_actions),
) -> ActionResult:
    """
    Create an account and start a session for it.
    """
    return await actions.create_account(await _form_fields(request), response)


@router.post("/logout")
async def logout(actions: AuthActions = Depends(get_auth_actions)):
    """
    End the session and redirect to the login page.
    """
    outcome = actions.logout()
    if isinstance(outcome, ActionResult):
        return _action_failure(outcome)
    return outcome


@router.get("/me", response_model=Optional[UserProfile])
async def me(user: Optional[UserProfile] = Depends(get_optional_user)) -> Optional[UserProfile]:
    """
    Get the current user's profile, or null when not logged in.
    """
    return user


@router.post("/profile", response_model=ActionResult)
async def update_profile(
    request: Request,
    response: Response,
    actions: AuthActions = Depends(get_auth_actions),
) -> ActionResult:
    """
    Update the current user's name and email.

    Any other submitted field (role included) is ignored.
    """
    return await actions.update_profile(
        request, await _form_fields(request), response
    )


@router.post("/delete")
async def delete_account(
    request: Request,
    actions: AuthActions = Depends(get_auth_actions),
):
    """
    Delete the current user's account and redirect home.

    Requires authentication.
    """
    outcome = await actions.delete_account(request)
    if isinstance(outcome, ActionResult):
        return _action_failure(outcome)
    return outcome
