"""Token and password primitives."""

from forum_auth.services.jwt_service import JWTService
from forum_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
