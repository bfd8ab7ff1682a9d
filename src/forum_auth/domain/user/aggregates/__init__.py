from forum_auth.domain.user.aggregates.user import User

__all__ = [
    "User",
]
