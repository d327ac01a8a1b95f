"""
Form actions for the auth flow.

Each action takes the raw form fields, runs the matching AuthService
operation and reports the outcome as an ActionResult instead of raising.
The session cookie is only written once the operation has fully
succeeded, so a failed action never leaves a half-applied session.

Two actions intentionally escape the result pattern:
- logout answers with a redirect to the login page;
- delete_account raises UnauthenticatedError when there is no verified
  session, before anything is touched.
"""

import logging
from typing import Any, Optional, Union

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from shared.exceptions import (
    AuthenticationError,
    ClassiflowError,
    NotFoundError,
    ValidationError,
)
from shared.models import ActionResult

from .cookies import SessionCookieManager
from .exceptions import UnauthenticatedError, UnexpectedError
from .forms import CreateAccountForm, LoginForm, ProfileForm, parse_form
from .interfaces import IAuthService
from .models import UserProfile

logger = logging.getLogger(__name__)

# Errors the user can act on; anything else is reported generically
_USER_FACING_ERRORS = (ValidationError, NotFoundError, AuthenticationError)


def _failure(response: Response, error: ClassiflowError) -> ActionResult:
    response.status_code = error.status_code
    return ActionResult.from_error(error)


class AuthActions:
    """Cookie-aware wrapper around the auth service."""

    def __init__(
        self,
        service: IAuthService,
        cookies: SessionCookieManager,
        login_path: str = "/login",
        post_delete_path: str = "/",
    ):
        self._service = service
        self._cookies = cookies
        self._login_path = login_path
        self._post_delete_path = post_delete_path

    async def login(self, data: dict[str, Any], response: Response) -> ActionResult:
        try:
            form = parse_form(LoginForm, data)
            user, token = await self._service.login(form)
        except _USER_FACING_ERRORS as e:
            logger.info(f"Login rejected: {e.code}")
            return _failure(response, e)
        except Exception:
            logger.exception("Login error")
            return _failure(response, UnexpectedError())

        self._cookies.set(response, token)
        return ActionResult.ok(user.to_session_user())

    async def create_account(
        self, data: dict[str, Any], response: Response
    ) -> ActionResult:
        try:
            form = parse_form(CreateAccountForm, data)
            user, token = await self._service.create_account(form)
        except _USER_FACING_ERRORS as e:
            logger.info(f"Signup rejected: {e.code}")
            return _failure(response, e)
        except Exception:
            logger.exception("Account creation error")
            return _failure(response, UnexpectedError())

        self._cookies.set(response, token)
        return ActionResult.ok(user.to_session_user())

    def logout(self) -> Union[RedirectResponse, ActionResult]:
        """
        Clear the session cookie and redirect to the login page.

        Clearing happens whether or not a session exists.
        """
        response = RedirectResponse(self._login_path, status_code=303)
        try:
            self._cookies.clear(response)
        except Exception:
            logger.exception("Logout error")
            return ActionResult.form_error("An error occurred during logout")
        return response

    async def get_current_user(self, request: Request) -> Optional[UserProfile]:
        """Resolve the request's session to a profile, or None. Never raises."""
        token = self._cookies.read(request)
        if not token:
            return None
        try:
            return await self._service.get_current_user(token)
        except Exception:
            logger.exception("Get current user error")
            return None

    async def update_profile(
        self, request: Request, data: dict[str, Any], response: Response
    ) -> ActionResult:
        current = await self.get_current_user(request)
        if current is None:
            return _failure(
                response,
                UnauthenticatedError("You must be logged in to update your profile."),
            )

        try:
            form = parse_form(ProfileForm, data)
            # Scoped to the session's own id; role is not part of the form
            profile = await self._service.update_profile(current.id, form)
        except _USER_FACING_ERRORS as e:
            logger.info(f"Profile update rejected for {current.id}: {e.code}")
            return _failure(response, e)
        except Exception:
            logger.exception("Update profile error")
            return _failure(response, UnexpectedError("An unexpected error occurred."))

        return ActionResult.ok(profile)

    async def delete_account(
        self, request: Request
    ) -> Union[RedirectResponse, ActionResult]:
        """
        Delete the session's own account, end the session, redirect home.

        Raises:
            UnauthenticatedError: If the request has no verified session
        """
        current = await self.get_current_user(request)
        if current is None:
            raise UnauthenticatedError("You must be logged in to delete an account.")

        try:
            await self._service.delete_account(current.id)
            response = RedirectResponse(self._post_delete_path, status_code=303)
            self._cookies.clear(response)
        except Exception:
            logger.exception(f"Delete account error for {current.id}")
            return ActionResult.form_error(
                "An unexpected error occurred while deleting your account."
            )
        return response
