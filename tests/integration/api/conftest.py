"""Pytest fixtures for API integration tests."""

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from forum_auth.domain.user import UserRole
from forum_auth.presentation.api.app import API_V1_PREFIX, create_app
from forum_auth.presentation.api.config import get_api_settings
from forum_auth.presentation.api.dependencies import get_db_session
from forum_auth.presentation.cli.app import build_authentication_service
from forum_config.settings import Settings


@pytest.fixture
def auth_prefix() -> str:
    """Prefix of the auth routes."""
    return f"{API_V1_PREFIX}/auth"


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and cheap bcrypt."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        database_url_override="sqlite+aiosqlite:///:memory:",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        bcrypt_rounds=4,
    )


def _build_app(settings: Settings, session_maker):
    app = create_app(settings=settings)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: settings
    return app


@pytest.fixture
async def client(api_settings, session_maker):
    """HTTP client bound to the app over an in-memory database."""
    app = _build_app(api_settings, session_maker)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client


@pytest.fixture
async def stateless_client(api_settings, session_maker):
    """Client for an app with refresh tokens disabled."""
    settings = api_settings.model_copy(update={"refresh_tokens_enabled": False})
    app = _build_app(settings, session_maker)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client


@pytest.fixture
def alice() -> dict:
    return {"username": "alice", "password": "s3cretpass"}


@pytest.fixture
async def alice_tokens(client, auth_prefix, alice) -> dict:
    """Sign alice up and in; returns the token response body."""
    response = await client.post(f"{auth_prefix}/signup", json=alice)
    assert response.status_code == 201
    response = await client.post(f"{auth_prefix}/signin", json=alice)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
async def admin_headers(client, auth_prefix, api_settings, session_maker) -> dict:
    """Bearer headers for an admin created the way operators do it."""
    async with session_maker() as session:
        service = build_authentication_service(session, api_settings)
        await service.register("root_admin", "adminpass", role=UserRole.ADMIN)
        await session.commit()

    response = await client.post(
        f"{auth_prefix}/signin",
        json={"username": "root_admin", "password": "adminpass"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
