from forum_auth.presentation.api.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
    ValidationResponse,
)

__all__ = [
    "LoginRequest",
    "LogoutRequest",
    "RefreshRequest",
    "SignupRequest",
    "TokenResponse",
    "UserResponse",
    "ValidationResponse",
]
