"""
Session token codec.

Signs and verifies the compact token carried in the session cookie.
The token is the whole session state: there is no server-side session
store, so expiration is enforced every time a token is verified.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import ConfigurationError

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import TokenClaims, UserRecord

DEFAULT_TOKEN_TTL = timedelta(days=7)


class SessionTokenCodec:
    """
    Issues and verifies HS256-signed session tokens.

    The signing secret is passed in at construction so tests can use
    deterministic secrets; nothing here reads ambient configuration. A
    missing secret only fails when a token is issued or verified.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def _require_secret(self) -> None:
        if not self._secret:
            raise ConfigurationError("Session signing secret is not configured")

    def issue(self, user: UserRecord, now: Optional[datetime] = None) -> str:
        """
        Sign a token carrying the user's id, email and role.

        Args:
            user: The account the session belongs to
            now: Issuance time (defaults to the current UTC time)

        Returns:
            Encoded token string
        """
        self._require_secret()
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenClaims:
        """
        Verify signature and expiration and return the embedded claims.

        Raises:
            MissingTokenError: If token is empty
            ConfigurationError: If no signing secret is configured
            ExpiredTokenError: If the token's expiry has passed
            InvalidTokenError: If the token is tampered, malformed or
                missing required claims
        """
        if not token:
            raise MissingTokenError()
        self._require_secret()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
            return TokenClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
        except PydanticValidationError:
            raise InvalidTokenError("Token is missing identity claims")
