"""Value objects for the user domain."""

from forum_auth.domain.user.value_objects.user_role import UserRole

__all__ = [
    "UserRole",
]
