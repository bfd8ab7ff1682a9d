"""SQLAlchemy implementation of SessionRepository."""

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum_auth.domain.shared.time import ensure_tz_aware, utc_now
from forum_auth.persistence.sqlalchemy.base import store_errors
from forum_auth.persistence.sqlalchemy.models import SessionModel
from forum_auth.repositories import SessionData, SessionRepository

logger = logging.getLogger(__name__)


class SessionRepositorySQLAlchemy(SessionRepository):
    """SQLAlchemy implementation of SessionRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_data(self, model: SessionModel) -> SessionData:
        return SessionData(
            id=model.id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            created_at=ensure_tz_aware(model.created_at),
        )

    async def create(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> SessionData:
        model = SessionModel(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            created_at=utc_now(),
        )
        with store_errors("create_session"):
            self._session.add(model)
            await self._session.flush()

        logger.debug("Created session %s for user: %s", model.id, user_id)
        return self._to_data(model)

    async def find_by_token_hash(self, token_hash: str) -> SessionData | None:
        stmt = select(SessionModel).where(SessionModel.token_hash == token_hash)
        with store_errors("find_session"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._to_data(model) if model else None

    async def delete_by_token_hash(self, token_hash: str) -> bool:
        stmt = delete(SessionModel).where(SessionModel.token_hash == token_hash)
        with store_errors("delete_session"):
            result = await self._session.execute(stmt)
            await self._session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_expired(self) -> int:
        stmt = delete(SessionModel).where(SessionModel.expires_at <= utc_now())
        with store_errors("delete_expired_sessions"):
            result = await self._session.execute(stmt)
            await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined]
