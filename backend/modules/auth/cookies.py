"""
Session cookie handling.

The session token travels in a single HTTP-only cookie scoped to "/".
"""

from typing import Optional

from fastapi import Request, Response

DEFAULT_COOKIE_NAME = "auth-token"


class SessionCookieManager:
    """Sets, reads and clears the session cookie."""

    def __init__(
        self,
        name: str = DEFAULT_COOKIE_NAME,
        max_age: int = 60 * 60 * 24 * 7,
        secure: bool = False,
        path: str = "/",
    ):
        self.name = name
        self._max_age = max_age
        self._secure = secure
        self._path = path

    def read(self, request: Request) -> Optional[str]:
        """Return the token from the request, or None if absent."""
        return request.cookies.get(self.name) or None

    def set(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.name,
            value=token,
            max_age=self._max_age,
            path=self._path,
            secure=self._secure,
            httponly=True,
            samesite="lax",
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            key=self.name,
            path=self._path,
            secure=self._secure,
            httponly=True,
            samesite="lax",
        )
