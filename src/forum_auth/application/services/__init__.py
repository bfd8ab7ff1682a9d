from forum_auth.application.services.authentication_service import (
    AuthenticationService,
    CredentialPolicy,
    hash_refresh_token,
)

__all__ = [
    "AuthenticationService",
    "CredentialPolicy",
    "hash_refresh_token",
]
