"""SQLAlchemy implementation for forum_auth persistence.

Provides:
- Base: Declarative base for all models
- UserModel, SessionModel: table mappings
- UserRepositorySQLAlchemy, SessionRepositorySQLAlchemy: repository implementations
- create_tables / drop_tables: schema management without migrations
"""

from forum_auth.persistence.sqlalchemy.base import Base, TimestampMixin
from forum_auth.persistence.sqlalchemy.database import (
    create_engine_from_url,
    create_session_maker,
    create_tables,
    drop_tables,
)
from forum_auth.persistence.sqlalchemy.models import SessionModel, UserModel
from forum_auth.persistence.sqlalchemy.repositories import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "TimestampMixin",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine_from_url",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
