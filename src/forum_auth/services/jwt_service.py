"""JWT token service.

Provides access token creation and verification. Only the HMAC family is
accepted, so a token signed with ``none`` or an asymmetric algorithm is
rejected before its payload is trusted.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from forum_auth.domain.user.value_objects import UserRole
from forum_auth.exceptions import InvalidTokenError
from forum_auth.schemas import TokenClaims

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")
REQUIRED_CLAIMS = ["exp", "sub", "username", "role"]


class JWTService:
    """Service for JWT access token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(1, "alice", UserRole.USER)
    >>> claims = service.verify_token(token)
    >>> print(claims.user_id)
    1
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 24
    DEFAULT_ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        algorithm
            One of HS256, HS384, HS512 (default HS256)
        access_token_expire_hours
            Hours until access token expires (default 24)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if algorithm not in SUPPORTED_ALGORITHMS:
            msg = f"Unsupported JWT algorithm: {algorithm}"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_expire = timedelta(hours=access_token_expire_hours)
        logger.debug(
            "JWT service configured (algorithm=%s, secret length=%d)",
            algorithm,
            len(secret_key),
        )

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def access_token_ttl_seconds(self) -> int:
        """Access token lifetime in seconds (``expires_in`` of a bundle)."""
        return int(self._access_expire.total_seconds())

    def create_access_token(
        self,
        user_id: int,
        username: str,
        role: UserRole,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Parameters
        ----------
        user_id
            The user's id
        username
            The user's username
        role
            The user's role
        expires_delta
            Custom expiration time (optional, may be negative in tests)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._access_expire)

        payload = {
            "sub": str(user_id),
            "username": username,
            "role": UserRole(role).value,
            "type": self.TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenClaims:
        """Verify and decode an access token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenClaims containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        if not token:
            raise InvalidTokenError("Token is empty")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )

            if payload.get("type", self.TOKEN_TYPE) != self.TOKEN_TYPE:
                raise InvalidTokenError("Not an access token")

            return TokenClaims(
                user_id=int(payload["sub"]),
                username=str(payload["username"]),
                role=UserRole(payload["role"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
