"""Unit tests for Settings validation."""

import pytest
from pydantic import SecretStr, ValidationError

from forum_config.settings import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "jwt_secret_key": SecretStr("settings-test-secret-of-32-bytes"),
        "postgres_password": SecretStr("pw"),
    }
    values.update(overrides)
    return Settings(**values)


class TestSettingsDefaults:
    def test_defaults(self):
        settings = make_settings()

        assert settings.jwt_algorithm == "HS256"
        assert settings.jwt_access_token_expire_hours == 24
        assert settings.password_min_length == 8
        assert settings.username_pattern == r"^[a-zA-Z0-9_]{3,}$"
        assert settings.refresh_tokens_enabled is True

    def test_database_url_built_from_components(self):
        settings = make_settings(
            postgres_host="db",
            postgres_user="auth",
            postgres_password=SecretStr("pw"),
            postgres_db="forum_auth",
            database_url_override=None,
        )
        assert settings.database_url == "postgresql+asyncpg://auth:pw@db:5432/forum_auth"

    def test_database_url_override(self):
        settings = make_settings(database_url_override="sqlite+aiosqlite:///:memory:")
        assert settings.database_url == "sqlite+aiosqlite:///:memory:"

    def test_cors_origins_are_split(self):
        settings = make_settings(api_cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_settings_are_frozen(self):
        settings = make_settings()
        with pytest.raises(ValidationError):
            settings.app_name = "Other"


class TestSettingsValidation:
    def test_blank_secret_rejected(self):
        with pytest.raises(ValidationError, match="JWT_SECRET_KEY"):
            make_settings(jwt_secret_key=SecretStr("   "))

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 bytes"):
            make_settings(jwt_secret_key=SecretStr("too-short-secret"))

    def test_postgres_password_is_required(self, monkeypatch):
        monkeypatch.delenv("POSTGRES_PASSWORD", raising=False)

        with pytest.raises(ValidationError, match="postgres_password"):
            Settings(
                _env_file=None,
                jwt_secret_key=SecretStr("settings-test-secret-of-32-bytes"),
            )

    def test_asymmetric_algorithm_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(jwt_algorithm="RS256")

    @pytest.mark.parametrize(
        "field,value",
        [
            ("jwt_access_token_expire_hours", 0),
            ("jwt_refresh_token_expire_days", 400),
            ("password_min_length", 73),
            ("bcrypt_rounds", 3),
            ("username_pattern", "[unclosed"),
        ],
    )
    def test_out_of_range_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            make_settings(**{field: value})
