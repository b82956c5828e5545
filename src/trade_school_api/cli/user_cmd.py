"""User management CLI commands."""

import asyncio

import typer

user_app = typer.Typer()


@user_app.command("create")
def create_user(
    username: str = typer.Option(..., prompt=True, help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Exit successfully if user already exists (idempotent mode)",
    ),
) -> None:
    """Create a login account for the write endpoints."""
    asyncio.run(_create_user(username, password, if_not_exists=if_not_exists))


async def _create_user(username: str, password: str, *, if_not_exists: bool = False) -> None:
    """Async implementation of user creation."""
    from trade_school_api.core.config import get_settings
    from trade_school_api.core.database import dispose_engine, get_session_factory, init_engine
    from trade_school_api.core.validation import RequestValidationFailed, validate_part
    from trade_school_api.schemas.auth import LoginRequest
    from trade_school_api.services.auth_service import create_user

    try:
        credentials = validate_part(LoginRequest, {"username": username, "password": password})
    except RequestValidationFailed as e:
        typer.echo(f"Error: invalid credentials {e}", err=True)
        raise typer.Exit(code=1) from e

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        async with factory() as session:
            user = await create_user(session, credentials.username, credentials.password)
            typer.echo(f"User '{user.username}' created with id {user.id}")
    except ValueError as e:
        # create_user signals duplicates with "already exists" in the message
        if if_not_exists and "already exists" in str(e):
            typer.echo(f"User '{username}' already exists, skipping (--if-not-exists)")
            return
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        await dispose_engine()
