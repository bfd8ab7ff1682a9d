"""FastAPI dependency injection for the auth API.

Provides dependencies for:
- Database sessions
- Token and password services
- The authentication service
- Bearer token extraction
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forum_auth.application.services import AuthenticationService, CredentialPolicy
from forum_auth.exceptions import InvalidTokenError
from forum_auth.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    create_engine_from_url,
    create_session_maker,
)
from forum_auth.presentation.api.config import get_api_settings
from forum_auth.services import JWTService, PasswordHashingService
from forum_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.
    """
    return create_engine_from_url(get_settings().database_url)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return create_session_maker(get_engine())


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Anything not committed by the route is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    The session repository is left out when refresh tokens are disabled,
    which makes refresh and logout report UNIMPLEMENTED.
    """
    session_repo = (
        SessionRepositorySQLAlchemy(session) if settings.refresh_tokens_enabled else None
    )

    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        session_repository=session_repo,
        password_service=password_service,
        jwt_service=jwt_service,
        policy=CredentialPolicy.from_settings(settings),
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Bearer Token
# -----------------------------------------------------------------------------


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Extract the bearer token from the Authorization header.

    Raises
    ------
    InvalidTokenError
        If the header is missing or not a bearer token
    """
    if credentials is None or not credentials.credentials:
        raise InvalidTokenError("Authentication required")
    return credentials.credentials


BearerToken = Annotated[str, Depends(get_bearer_token)]
OptionalCredentials = Annotated[
    HTTPAuthorizationCredentials | None,
    Depends(security),
]
