"""User repository interface (the credential store contract)."""

from abc import ABC, abstractmethod
from typing import Optional

from forum_auth.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Implementations must enforce username uniqueness themselves (e.g. a
    unique index) and raise ``UserAlreadyExistsError`` when it is violated.
    Any other storage failure is raised as ``CredentialStoreError``.
    """

    @abstractmethod
    async def create(self, user: User) -> int:
        """Persist a new user and return the id assigned by the store."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username (exact match)."""

    @abstractmethod
    async def update(self, user: User) -> None:
        """Update role and password hash of an existing user."""

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """Delete a user by ID (administrative use only)."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""
