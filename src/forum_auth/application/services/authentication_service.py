"""Authentication service for registration, login and token lifecycle."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import re
import secrets
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from forum_auth.domain.shared.time import utc_now
from forum_auth.domain.user import User, UserRole
from forum_auth.exceptions import (
    AuthError,
    InternalError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidTokenError,
    InvalidUsernameError,
    UnimplementedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from forum_auth.schemas import TokenBundle, TokenClaims
from forum_auth.services.password_service import BCRYPT_MAX_PASSWORD_BYTES

if TYPE_CHECKING:
    from forum_config import Settings
    from forum_auth.domain.user import UserRepository
    from forum_auth.repositories import SessionRepository
    from forum_auth.services import JWTService, PasswordHashingService

logger = logging.getLogger(__name__)

DEFAULT_USERNAME_PATTERN = r"^[a-zA-Z0-9_]{3,}$"
REFRESH_TOKEN_BYTES = 32
# User ids are signed 64-bit keys
MAX_USER_ID = 2**63 - 1


def hash_refresh_token(raw_token: str) -> str:
    """Return the SHA-256 hex digest stored in place of a refresh token."""
    return hashlib.sha256(raw_token.encode()).hexdigest()


@dataclass(frozen=True)
class CredentialPolicy:
    """Immutable credential rules applied by the authentication service."""

    username_pattern: str = DEFAULT_USERNAME_PATTERN
    password_min_length: int = 8
    refresh_token_ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> CredentialPolicy:
        return cls(
            username_pattern=settings.username_pattern,
            password_min_length=settings.password_min_length,
            refresh_token_ttl=timedelta(days=settings.jwt_refresh_token_expire_days),
        )

    def username_is_valid(self, username: str) -> bool:
        return re.fullmatch(self.username_pattern, username) is not None

    def password_is_valid(self, password: str) -> bool:
        if len(password) < self.password_min_length:
            return False
        return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates the password hasher, the JWT codec and the credential
    store to provide:
    - User registration
    - Login with password
    - Access token validation
    - Refresh token rotation and logout

    Every failure leaves as an ``AuthError``. Unexpected exceptions from
    collaborators are logged and surface as ``InternalError``.

    When built without a session repository the service is stateless:
    login hands out an empty refresh token and refresh/logout are
    unimplemented.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository | None,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        policy: CredentialPolicy | None = None,
    ):
        self._user_repo = user_repository
        self._session_repo = session_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._policy = policy or CredentialPolicy()

    @property
    def refresh_tokens_enabled(self) -> bool:
        return self._session_repo is not None

    @contextmanager
    def _guard(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except AuthError:
            raise
        except Exception as e:
            details = ", ".join(f"{k}={v}" for k, v in context.items())
            logger.error(
                "%s failed (%s): %s",
                operation,
                details,
                type(e).__name__,
                exc_info=True,
            )
            raise InternalError from e

    async def _issue_tokens(self, user: User) -> TokenBundle:
        access_token = self._jwt_service.create_access_token(
            user_id=user.id,
            username=user.username,
            role=user.role,
        )

        refresh_token = ""
        if self._session_repo is not None:
            refresh_token = secrets.token_urlsafe(REFRESH_TOKEN_BYTES)
            await self._session_repo.create(
                user_id=user.id,
                token_hash=hash_refresh_token(refresh_token),
                expires_at=utc_now() + self._policy.refresh_token_ttl,
            )

        return TokenBundle(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._jwt_service.access_token_ttl_seconds,
        )

    async def _rehash_if_needed(self, user: User, password: str) -> None:
        if not self._password_service.needs_rehash(user.password_hash):
            return
        new_hash = await asyncio.to_thread(self._password_service.hash, password)
        user.change_password_hash(new_hash)
        await self._user_repo.update(user)
        logger.info("Password hash upgraded for user: %s", user.username)

    async def register(
        self,
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new account.

        Parameters
        ----------
        username
            Must fully match the configured username pattern
        password
            Plaintext password, checked against the length policy
        role
            Role of the new account. Only trusted callers pass ``admin``.

        Returns
        -------
        The persisted user, with its store-assigned id

        Raises
        ------
        InvalidUsernameError, InvalidPasswordError, UserAlreadyExistsError,
        InternalError
        """
        if not self._policy.username_is_valid(username):
            logger.info("Registration rejected: invalid username format")
            raise InvalidUsernameError
        if not self._policy.password_is_valid(password):
            logger.info("Registration rejected for %s: password policy", username)
            raise InvalidPasswordError

        with self._guard("register", username=username):
            existing = await self._user_repo.find_by_username(username)
            if existing is not None:
                logger.info("Registration rejected: %s already exists", username)
                raise UserAlreadyExistsError(username)

            password_hash = await asyncio.to_thread(
                self._password_service.hash,
                password,
            )
            user = User.create(username, password_hash, role=UserRole(role))
            user_id = await self._user_repo.create(user)
            user.assign_id(user_id)

        logger.info("User registered: %s (role: %s)", username, user.role.value)
        return user

    async def login(self, username: str, password: str) -> TokenBundle:
        """Verify credentials and issue a token bundle.

        Unknown usernames and wrong passwords both raise
        ``InvalidCredentialsError``.
        """
        with self._guard("login", username=username):
            user = await self._user_repo.find_by_username(username)
            if user is None:
                await asyncio.to_thread(self._password_service.verify_dummy, password)
                logger.warning("Login failed for %s", username)
                raise InvalidCredentialsError

            is_valid = await asyncio.to_thread(
                self._password_service.verify,
                password,
                user.password_hash,
            )
            if not is_valid:
                logger.warning("Login failed for %s", username)
                raise InvalidCredentialsError

            await self._rehash_if_needed(user, password)
            bundle = await self._issue_tokens(user)

        logger.info("User logged in: %s", username)
        return bundle

    async def validate_token(self, token: str) -> TokenClaims:
        """Decode a bearer token without touching the store."""
        with self._guard("validate_token"):
            try:
                return self._jwt_service.verify_token(token)
            except InvalidTokenError as e:
                logger.debug("Token rejected: %s", e.message)
                raise InvalidTokenError from e

    async def get_user_by_id(self, user_id: int) -> User:
        if not 1 <= user_id <= MAX_USER_ID:
            logger.debug("User lookup with out-of-range id: %s", user_id)
            raise UserNotFoundError(user_id)
        with self._guard("get_user_by_id", user_id=user_id):
            user = await self._user_repo.find_by_id(user_id)
        if user is None:
            logger.debug("User lookup missed: %s", user_id)
            raise UserNotFoundError(user_id)
        return user

    async def refresh_token(self, refresh_token: str) -> TokenBundle:
        """Exchange a refresh token for a new bundle.

        The presented token is consumed; a second use fails.
        """
        if self._session_repo is None:
            raise UnimplementedError("refresh_token")
        if not refresh_token:
            raise InvalidTokenError

        token_hash = hash_refresh_token(refresh_token)
        with self._guard("refresh_token"):
            session = await self._session_repo.find_by_token_hash(token_hash)
            if session is None:
                logger.info("Refresh rejected: unknown session")
                raise InvalidTokenError

            if session.is_expired(utc_now()):
                await self._session_repo.delete_by_token_hash(token_hash)
                logger.info("Refresh rejected: session expired (user %s)", session.user_id)
                raise InvalidTokenError

            user = await self._user_repo.find_by_id(session.user_id)
            if user is None:
                await self._session_repo.delete_by_token_hash(token_hash)
                logger.warning("Refresh rejected: user %s is gone", session.user_id)
                raise InvalidTokenError

            # Lost a race with a concurrent refresh of the same token
            if not await self._session_repo.delete_by_token_hash(token_hash):
                raise InvalidTokenError

            bundle = await self._issue_tokens(user)

        logger.debug("Tokens refreshed for user: %s", user.username)
        return bundle

    async def logout(self, refresh_token: str) -> None:
        """Revoke a refresh token. Unknown tokens are ignored."""
        if self._session_repo is None:
            raise UnimplementedError("logout")
        if not refresh_token:
            return

        with self._guard("logout"):
            deleted = await self._session_repo.delete_by_token_hash(
                hash_refresh_token(refresh_token),
            )

        if deleted:
            logger.info("Session revoked")
        else:
            logger.debug("Logout for unknown or already revoked session")

    async def change_role(self, username: str, role: UserRole) -> User:
        """Set a user's role. Reserved for operator tooling."""
        with self._guard("change_role", username=username):
            user = await self._user_repo.find_by_username(username)
            if user is None:
                raise UserNotFoundError(username)
            if UserRole(role) == UserRole.ADMIN:
                user.promote_to_admin()
            else:
                user.demote_to_user()
            await self._user_repo.update(user)

        logger.info("Role of %s set to %s", username, user.role.value)
        return user

    async def purge_expired_sessions(self) -> int:
        """Delete expired sessions and return how many were removed."""
        if self._session_repo is None:
            return 0
        with self._guard("purge_expired_sessions"):
            removed = await self._session_repo.delete_expired()
        logger.info("Purged %d expired sessions", removed)
        return removed
