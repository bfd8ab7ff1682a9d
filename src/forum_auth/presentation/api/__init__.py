"""FastAPI transport for the authentication service."""

from forum_auth.presentation.api.app import create_app

__all__ = ["create_app"]
