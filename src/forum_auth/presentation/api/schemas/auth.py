"""Authentication schemas for request/response models.

Request schemas only check presence and types; format and length rules
are enforced by the authentication service so every caller gets the
same error codes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from forum_auth.domain.user import User, UserRole
from forum_auth.schemas import TokenBundle, TokenClaims


class SignupRequest(BaseModel):
    """Request schema for user registration."""

    username: str = Field(..., description="Letters, digits and underscores")
    password: str = Field(..., description="Password (at least 8 characters)")
    role: UserRole = Field(
        default=UserRole.USER,
        description="Requesting 'admin' requires an admin bearer token",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "s3cretpass",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    username: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "s3cretpass",
            },
        },
    )


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token from signin or refresh")


class LogoutRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token to revoke")


class TokenResponse(BaseModel):
    """Response schema for signin and refresh."""

    access_token: str
    refresh_token: str = Field(
        description="Opaque refresh token (empty when sessions are disabled)",
    )
    token_type: str = "Bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")

    @classmethod
    def from_bundle(cls, bundle: TokenBundle) -> "TokenResponse":
        return cls(
            access_token=bundle.access_token,
            refresh_token=bundle.refresh_token,
            token_type=bundle.token_type,
            expires_in=bundle.expires_in,
        )


class UserResponse(BaseModel):
    """Public user data. The password hash is never exposed."""

    id: int
    username: str
    role: UserRole
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            created_at=user.created_at,
        )


class ValidationResponse(BaseModel):
    """Response schema for token validation."""

    valid: bool = True
    user_id: int
    username: str
    role: UserRole
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "ValidationResponse":
        return cls(
            user_id=claims.user_id,
            username=claims.username,
            role=claims.role,
            expires_at=claims.expires_at,
        )
