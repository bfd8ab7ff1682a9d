"""Forum auth CLI application using Typer.

Operator utilities: secret generation, schema creation, privileged
account management and the expired-session sweep.
"""

import asyncio
import secrets
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from forum_auth.application.services import AuthenticationService, CredentialPolicy
from forum_auth.domain.user import User, UserRole
from forum_auth.exceptions import AuthError
from forum_auth.persistence.sqlalchemy import (
    SessionRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    create_engine_from_url,
    create_session_maker,
    create_tables,
)
from forum_auth.services import JWTService, PasswordHashingService
from forum_config import configure_logging
from forum_config.settings import Settings, get_settings

T = TypeVar("T")

app = typer.Typer(
    name="forum-auth",
    help="Forum auth service CLI",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(name="db", help="Database schema management", no_args_is_help=True)
users_app = typer.Typer(name="users", help="Account administration", no_args_is_help=True)
sessions_app = typer.Typer(
    name="sessions",
    help="Refresh-token session maintenance",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(db_app)
app.add_typer(users_app)
app.add_typer(sessions_app)


def build_authentication_service(
    session: AsyncSession,
    settings: Settings,
) -> AuthenticationService:
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        session_repository=(
            SessionRepositorySQLAlchemy(session)
            if settings.refresh_tokens_enabled
            else None
        ),
        password_service=PasswordHashingService(rounds=settings.bcrypt_rounds),
        jwt_service=JWTService(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            access_token_expire_hours=settings.jwt_access_token_expire_hours,
        ),
        policy=CredentialPolicy.from_settings(settings),
    )


async def _with_service(
    operation: Callable[[AuthenticationService], Awaitable[T]],
) -> T:
    """Run ``operation`` in one committed transaction."""
    settings = get_settings()
    engine = create_engine_from_url(settings.database_url)
    try:
        async with create_session_maker(engine)() as session:
            result = await operation(build_authentication_service(session, settings))
            await session.commit()
            return result
    finally:
        await engine.dispose()


def _run(operation: Callable[[AuthenticationService], Awaitable[T]]) -> T:
    configure_logging()
    try:
        return asyncio.run(_with_service(operation))
    except AuthError as e:
        console.print(f"[red]Error:[/red] {e.message} ({e.code.value})")
        raise typer.Exit(1) from e


def _print_user(user: User) -> None:
    table = Table(show_header=False)
    table.add_row("id", str(user.id))
    table.add_row("username", user.username)
    table.add_row("role", user.role.value)
    table.add_row("created", user.created_at.isoformat())
    console.print(table)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for the service configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Forum Auth Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes is comfortably above the HS512 key size
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env (Docker) or "
        "config/.env.dev (local) file.[/dim]\n"
    )


@db_app.command("init")
def init_db() -> None:
    """Create missing tables (existing tables are left untouched)."""
    configure_logging()

    async def _init() -> None:
        engine = create_engine_from_url(get_settings().database_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    console.print("[green]Database schema is up to date.[/green]")


@users_app.command("create")
def create_user(
    username: str = typer.Argument(..., help="Login name"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (prompted when omitted)",
    ),
    admin: bool = typer.Option(False, "--admin", help="Create an admin account"),
) -> None:
    """Create an account. This is the bootstrap path for the first admin."""
    role = UserRole.ADMIN if admin else UserRole.USER
    user = _run(lambda service: service.register(username, password, role=role))
    console.print(f"[green]Created {role.value} account.[/green]")
    _print_user(user)


@users_app.command("set-role")
def set_role(
    username: str = typer.Argument(..., help="Login name"),
    role: UserRole = typer.Argument(..., help="user or admin"),
) -> None:
    """Promote or demote an existing account."""
    user = _run(lambda service: service.change_role(username, role))
    console.print(f"[green]{user.username} is now {user.role.value}.[/green]")


@users_app.command("show")
def show_user(user_id: int = typer.Argument(..., help="Numeric user id")) -> None:
    """Show a user's public profile."""
    user = _run(lambda service: service.get_user_by_id(user_id))
    _print_user(user)


@sessions_app.command("purge")
def purge_sessions() -> None:
    """Delete expired refresh-token sessions. Meant to run from cron."""
    removed = _run(lambda service: service.purge_expired_sessions())
    console.print(f"Removed [bold]{removed}[/bold] expired session(s).")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default API_PORT)"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "forum_auth.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.api_debug,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
