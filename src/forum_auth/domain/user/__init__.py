"""User domain manages user identity.

This domain handles:
- User aggregate (identity: id, username, password hash, role)
- The repository contract the credential store must fulfil

Forum posts and chat messages only reference the numeric user id.
"""

from forum_auth.domain.user.aggregates import User
from forum_auth.domain.user.repositories import UserRepository
from forum_auth.domain.user.value_objects import UserRole

__all__ = [
    "User",
    "UserRepository",
    "UserRole",
]
