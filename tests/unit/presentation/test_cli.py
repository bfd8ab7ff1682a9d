"""Tests for the operator CLI."""

import pytest
from typer.testing import CliRunner

from forum_auth.presentation.cli import app as cli_module
from forum_config import clear_settings_cache

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a throwaway SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("JWT_SECRET_KEY", "cli-test-secret-at-least-32-bytes-long")
    # Logging setup would bind to the runner's temporary stdout
    monkeypatch.setattr(cli_module, "configure_logging", lambda: None)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestSecrets:
    def test_generate_prints_env_lines(self):
        result = runner.invoke(cli_module.app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY=" in result.output
        assert "POSTGRES_PASSWORD=" in result.output


class TestUserCommands:
    def test_create_admin_then_show(self, cli_env):
        assert runner.invoke(cli_module.app, ["db", "init"]).exit_code == 0

        result = runner.invoke(
            cli_module.app,
            ["users", "create", "root_admin", "--password", "adminpass", "--admin"],
        )
        assert result.exit_code == 0, result.output
        assert "admin" in result.output

        result = runner.invoke(cli_module.app, ["users", "show", "1"])
        assert result.exit_code == 0
        assert "root_admin" in result.output

    def test_invalid_password_exits_non_zero(self, cli_env):
        runner.invoke(cli_module.app, ["db", "init"])

        result = runner.invoke(
            cli_module.app,
            ["users", "create", "bob", "--password", "short"],
        )

        assert result.exit_code == 1
        assert "INVALID_PASSWORD" in result.output

    def test_set_role(self, cli_env):
        runner.invoke(cli_module.app, ["db", "init"])
        runner.invoke(
            cli_module.app,
            ["users", "create", "carol", "--password", "s3cretpass"],
        )

        result = runner.invoke(cli_module.app, ["users", "set-role", "carol", "admin"])

        assert result.exit_code == 0
        assert "carol is now admin" in result.output

    def test_show_unknown_user(self, cli_env):
        runner.invoke(cli_module.app, ["db", "init"])

        result = runner.invoke(cli_module.app, ["users", "show", "999"])

        assert result.exit_code == 1
        assert "USER_NOT_FOUND" in result.output


class TestSessionCommands:
    def test_purge_on_empty_store(self, cli_env):
        runner.invoke(cli_module.app, ["db", "init"])

        result = runner.invoke(cli_module.app, ["sessions", "purge"])

        assert result.exit_code == 0
        assert "Removed" in result.output
