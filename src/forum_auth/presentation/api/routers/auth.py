"""Authentication router for signup, signin and token management."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from forum_auth.domain.user import UserRole
from forum_auth.exceptions import InvalidTokenError
from forum_auth.presentation.api.dependencies import (
    AuthService,
    BearerToken,
    DBSession,
    OptionalCredentials,
)
from forum_auth.presentation.api.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
    ValidationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _require_admin(
    auth_service: AuthService,
    credentials: OptionalCredentials,
) -> None:
    """Only an admin caller may create another admin."""
    forbidden = HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Creating an admin account requires admin privileges",
    )
    if credentials is None:
        raise forbidden
    try:
        claims = await auth_service.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        raise forbidden from e
    if not claims.is_admin:
        logger.warning("User %s tried to create an admin account", claims.user_id)
        raise forbidden


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Invalid username or password"},
        403: {"description": "Admin role requested without admin token"},
        409: {"description": "Username already taken"},
    },
)
async def signup(
    request: SignupRequest,
    auth_service: AuthService,
    session: DBSession,
    credentials: OptionalCredentials,
) -> UserResponse:
    if request.role == UserRole.ADMIN:
        await _require_admin(auth_service, credentials)

    user = await auth_service.register(
        username=request.username,
        password=request.password,
        role=request.role,
    )
    await session.commit()
    return UserResponse.from_user(user)


@router.post(
    "/signin",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def signin(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> TokenResponse:
    """
    Authenticate with username and password.

    Returns an access token and, when sessions are enabled, an opaque
    refresh token.
    """
    bundle = await auth_service.login(
        username=request.username,
        password=request.password,
    )
    await session.commit()
    return TokenResponse.from_bundle(bundle)


@router.get(
    "/validate",
    summary="Validate an access token",
    responses={
        200: {"description": "Token is valid"},
        401: {"description": "Missing, invalid or expired token"},
    },
)
async def validate(
    token: BearerToken,
    auth_service: AuthService,
) -> ValidationResponse:
    """Called by other services to authorize a request."""
    claims = await auth_service.validate_token(token)
    return ValidationResponse.from_claims(claims)


@router.get(
    "/users/{user_id}",
    summary="Get a user's public profile",
    responses={
        200: {"description": "User data"},
        404: {"description": "User not found"},
    },
)
async def get_user(
    user_id: int,
    auth_service: AuthService,
) -> UserResponse:
    user = await auth_service.get_user_by_id(user_id)
    return UserResponse.from_user(user)


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "Tokens refreshed successfully"},
        401: {"description": "Invalid, expired or revoked refresh token"},
        501: {"description": "Refresh tokens are disabled"},
    },
)
async def refresh(
    request: RefreshRequest,
    auth_service: AuthService,
    session: DBSession,
) -> TokenResponse:
    """
    Exchange a refresh token for a new token pair.

    The presented refresh token is consumed (rotation).
    """
    try:
        bundle = await auth_service.refresh_token(request.refresh_token)
    except InvalidTokenError:
        # Keep the cleanup of stale sessions
        await session.commit()
        raise
    await session.commit()
    return TokenResponse.from_bundle(bundle)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke a refresh token",
    responses={
        204: {"description": "Logged out (also for unknown tokens)"},
        501: {"description": "Refresh tokens are disabled"},
    },
)
async def logout(
    request: LogoutRequest,
    auth_service: AuthService,
    session: DBSession,
) -> Response:
    """Access tokens already issued stay valid until they expire."""
    await auth_service.logout(request.refresh_token)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
