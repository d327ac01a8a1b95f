"""
Authentication module.

Handles password hashing, session tokens and cookies, the user store,
and the login / signup / profile / delete form actions.

Public API:
- IAuthService: Interface for auth operations
- AuthService: Default implementation over IUserRepository
- AuthActions: Cookie-aware form actions returning ActionResult
- UserProfile / SessionUser: Safe user projections
- Auth exceptions: InvalidTokenError, DuplicateEmailError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import UserRole, UserRecord, UserProfile, SessionUser, TokenClaims
from .service import AuthService
from .actions import AuthActions
from .passwords import PasswordHasher
from .tokens import SessionTokenCodec
from .cookies import SessionCookieManager
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UnauthenticatedError,
    FormValidationError,
    UserNotFoundError,
    InvalidCredentialsError,
    DuplicateEmailError,
    UnexpectedError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Implementations
    "AuthService",
    "AuthActions",
    "PasswordHasher",
    "SessionTokenCodec",
    "SessionCookieManager",
    # Models
    "UserRole",
    "UserRecord",
    "UserProfile",
    "SessionUser",
    "TokenClaims",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UnauthenticatedError",
    "FormValidationError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "DuplicateEmailError",
    "UnexpectedError",
]
