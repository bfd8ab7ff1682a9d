"""SQLAlchemy implementation of UserRepository."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum_auth.domain.shared.time import ensure_tz_aware
from forum_auth.domain.user import User, UserRepository
from forum_auth.exceptions import CredentialStoreError, UserAlreadyExistsError
from forum_auth.persistence.sqlalchemy.base import store_errors
from forum_auth.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, user: User) -> int:
        model = self._map_to_model(user)

        with store_errors("create_user"):
            try:
                self._session.add(model)
                await self._session.flush()
            except IntegrityError as e:
                if "unique" in str(e).lower():
                    raise UserAlreadyExistsError(user.username) from e
                raise

        logger.info("Created user: %s (username: %s)", model.id, model.username)
        return model.id

    async def find_by_id(self, user_id: int) -> User | None:
        with store_errors("find_user_by_id"):
            model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_username(self, username: str) -> User | None:
        stmt = select(UserModel).where(UserModel.username == username)
        with store_errors("find_user_by_username"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def update(self, user: User) -> None:
        if user.id is None:
            msg = "Cannot update a user that was never stored"
            raise ValueError(msg)

        with store_errors("update_user"):
            model = await self._find_model_by_id(user.id)
            if model is None:
                raise CredentialStoreError("update_user", "User row is missing")
            self._update_model(model, user)
            await self._session.flush()

        logger.debug("Updated user: %s", user.id)

    async def delete(self, user_id: int) -> None:
        with store_errors("delete_user"):
            model = await self._find_model_by_id(user_id)
            if model:
                await self._session.delete(model)
                await self._session.flush()
                logger.info("Deleted user: %s", user_id)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        with store_errors("count_users"):
            result = await self._session.execute(stmt)
            return result.scalar_one()

    async def _find_model_by_id(self, user_id: int) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            password_hash=model.password_hash,
            role=model.role,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            username=user.username,
            password_hash=user.password_hash,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.username = user.username
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.updated_at = user.updated_at
