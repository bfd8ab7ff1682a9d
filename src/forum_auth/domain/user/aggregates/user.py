"""User aggregate for identity concerns only."""

from datetime import datetime
from typing import Union

from forum_auth.domain.shared.time import utc_now
from forum_auth.domain.user.value_objects import UserRole


class User:
    """
    User aggregate root.

    The id is assigned by the credential store on creation and never changes
    afterwards. The password hash is opaque to everything outside the
    authentication service and is kept out of ``repr``.
    """

    def __init__(
        self,
        username: str,
        password_hash: str,
        role: Union[str, UserRole] = UserRole.USER,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id
        self._username = username
        self._password_hash = password_hash
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> int | None:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_persisted(self) -> bool:
        return self._id is not None

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def assign_id(self, user_id: int) -> None:
        """Record the id handed out by the store. Only allowed once."""
        if self._id is not None:
            msg = f"User already has id {self._id}"
            raise ValueError(msg)
        self._id = user_id

    def promote_to_admin(self) -> None:
        self._role = UserRole.ADMIN
        self._updated_at = utc_now()

    def demote_to_user(self) -> None:
        self._role = UserRole.USER
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        self._password_hash = password_hash
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        username: str,
        password_hash: str,
        role: UserRole = UserRole.USER,
    ) -> "User":
        return cls(username=username, password_hash=password_hash, role=role)

    @classmethod
    def reconstitute(
        cls,
        id: int,
        username: str,
        password_hash: str,
        role: Union[str, UserRole],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username}, role={self._role.value})"
