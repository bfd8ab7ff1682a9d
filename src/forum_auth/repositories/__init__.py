"""Abstract repository interfaces for session tracking."""

from forum_auth.repositories.session_repository import (
    SessionData,
    SessionRepository,
)

__all__ = [
    "SessionData",
    "SessionRepository",
]
