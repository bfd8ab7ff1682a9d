from forum_auth.persistence.sqlalchemy.repositories.session_repository import (
    SessionRepositorySQLAlchemy,
)
from forum_auth.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "SessionRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
