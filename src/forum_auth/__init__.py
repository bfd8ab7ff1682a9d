"""Forum Auth - credential and token service for the forum platform.

It handles:
- User registration and login (bcrypt password hashing)
- Access token issuing and validation (HMAC-signed JWT)
- Refresh-token sessions with rotation and logout

Architecture:
    forum_auth/
    ├── domain/             # User aggregate and repository contract
    ├── application/        # AuthenticationService (use cases)
    ├── services/           # Pure logic (password hashing, JWT)
    ├── repositories/       # Session repository contract
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── presentation/       # FastAPI router and Typer CLI
    ├── schemas.py          # Data classes
    └── exceptions.py       # Error taxonomy

Usage:
    from forum_auth import AuthenticationService, JWTService, PasswordHashingService

    from forum_auth.persistence.sqlalchemy import (
        SessionRepositorySQLAlchemy,
        UserRepositorySQLAlchemy,
    )
"""

from forum_auth.application.services import AuthenticationService, CredentialPolicy
from forum_auth.domain.user import User, UserRepository, UserRole
from forum_auth.exceptions import (
    AuthError,
    ErrorCode,
    InternalError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidTokenError,
    InvalidUsernameError,
    UnimplementedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from forum_auth.repositories import SessionData, SessionRepository
from forum_auth.schemas import TokenBundle, TokenClaims
from forum_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Use cases
    "AuthenticationService",
    "CredentialPolicy",
    # Services
    "JWTService",
    "PasswordHashingService",
    # Domain and repositories (interfaces)
    "SessionData",
    "SessionRepository",
    "User",
    "UserRepository",
    "UserRole",
    # Schemas
    "TokenBundle",
    "TokenClaims",
    # Exceptions
    "AuthError",
    "ErrorCode",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidPasswordError",
    "InvalidTokenError",
    "InvalidUsernameError",
    "UnimplementedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
