"""SQLAlchemy base configuration."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from forum_auth.domain.shared.time import utc_now
from forum_auth.exceptions import CredentialStoreError


class Base(DeclarativeBase):
    """Base class for all database models."""


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps (utc_now)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and ORM failures as CredentialStoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise CredentialStoreError(operation) from e
