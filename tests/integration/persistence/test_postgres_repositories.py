"""Repository behavior against a real PostgreSQL container.

Run with --run-integration (needs Docker).
"""

from datetime import timedelta

import pytest

from forum_auth.domain.shared.time import utc_now
from forum_auth.domain.user import User
from forum_auth.exceptions import UserAlreadyExistsError
from forum_auth.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

pytestmark = pytest.mark.integration

HASH = "$2b$04$abcdefghijklmnopqrstuuABCDEFGHIJKLMNOPQRSTUVWXYZ01234"


class TestPostgresUserRepository:
    @pytest.mark.asyncio
    async def test_unique_violation_maps_to_user_exists(self, postgres_session):
        repo = UserRepositorySQLAlchemy(postgres_session)
        await repo.create(User.create("alice", HASH))

        with pytest.raises(UserAlreadyExistsError):
            await repo.create(User.create("alice", HASH))

        await postgres_session.rollback()

    @pytest.mark.asyncio
    async def test_round_trip_keeps_timezone(self, postgres_session):
        repo = UserRepositorySQLAlchemy(postgres_session)
        user_id = await repo.create(User.create("alice", HASH))
        await postgres_session.commit()
        postgres_session.expunge_all()

        found = await repo.find_by_id(user_id)

        assert found.username == "alice"
        assert found.created_at.tzinfo is not None


class TestPostgresSessionRepository:
    @pytest.mark.asyncio
    async def test_delete_expired(self, postgres_session):
        user_id = await UserRepositorySQLAlchemy(postgres_session).create(
            User.create("alice", HASH)
        )
        repo = SessionRepositorySQLAlchemy(postgres_session)
        await repo.create(user_id, "old", utc_now() - timedelta(hours=1))
        await repo.create(user_id, "new", utc_now() + timedelta(hours=1))

        assert await repo.delete_expired() == 1
        assert await repo.find_by_token_hash("new") is not None
