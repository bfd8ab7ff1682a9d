"""Abstract repository interface for refresh-token sessions.

This interface defines the contract for session persistence.
Implementations can use SQLAlchemy, Redis, or any other storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionData:
    """Immutable session data returned by repository.

    Only the SHA-256 hash of the refresh token is ever stored.
    """

    id: int
    user_id: int
    token_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the session has expired."""
        return now >= self.expires_at


class SessionRepository(ABC):
    """Abstract repository for refresh-token sessions."""

    @abstractmethod
    async def create(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> SessionData:
        """Create a new session.

        Parameters
        ----------
        user_id
            The owning user's id
        token_hash
            SHA-256 hash of the raw refresh token
        expires_at
            When the session expires

        Returns
        -------
        The stored session data
        """

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> SessionData | None:
        """Find a session by its token hash.

        Expired rows are returned as well; callers decide on validity.

        Parameters
        ----------
        token_hash
            SHA-256 hash of the raw refresh token

        Returns
        -------
        Session data if found, None otherwise
        """

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> bool:
        """Delete a session.

        Parameters
        ----------
        token_hash
            SHA-256 hash of the raw refresh token

        Returns
        -------
        True if deleted, False if not found
        """

    @abstractmethod
    async def delete_expired(self) -> int:
        """Remove expired sessions.

        Returns
        -------
        Number of sessions deleted
        """
