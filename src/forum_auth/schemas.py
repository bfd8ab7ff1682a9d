"""Data transfer objects returned by the authentication layer."""

from dataclasses import dataclass
from datetime import datetime

from forum_auth.domain.shared.time import utc_now
from forum_auth.domain.user.value_objects import UserRole


@dataclass(frozen=True)
class TokenClaims:
    """Decoded access-token claims.

    Attributes
    ----------
    user_id
        The authenticated user's id
    username
        Username at the time the token was issued
    role
        Role at the time the token was issued
    expires_at
        When the token expires (UTC)
    """

    user_id: int
    username: str
    role: UserRole
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return utc_now() >= self.expires_at


@dataclass(frozen=True)
class TokenBundle:
    """Result of a successful login or refresh.

    ``refresh_token`` is empty when the session store is disabled.
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "Bearer"
