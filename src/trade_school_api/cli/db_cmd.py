"""Schema migrations for the users, trade_schools and students tables.

The Alembic environment reads ``DATABASE_URL`` through the app settings,
so these commands migrate whichever database the API itself would use.
"""

from pathlib import Path

import typer
from loguru import logger

db_app = typer.Typer()

_CONFIG_OPTION = typer.Option(
    "alembic.ini",
    "--config",
    help="Alembic ini file; relative paths resolve from the working directory",
)


def _alembic_config(ini_path: str):
    """Load the Alembic config, failing with exit code 1 if the file is absent."""
    from alembic.config import Config

    if not Path(ini_path).is_file():
        logger.error(f"Alembic config not found: {ini_path}")
        raise typer.Exit(code=1)
    return Config(ini_path)


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Revision to migrate to (default: latest)"),
    ini_path: str = _CONFIG_OPTION,
) -> None:
    """Create or update the directory tables up to REVISION."""
    from alembic import command

    config = _alembic_config(ini_path)
    logger.info(f"Migrating trade school schema up to {revision}")
    command.upgrade(config, revision)
    logger.info("Trade school schema is up to date")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Revision to roll back to (default: one step)"),
    ini_path: str = _CONFIG_OPTION,
) -> None:
    """Roll the schema back; "base" drops every directory table."""
    from alembic import command

    config = _alembic_config(ini_path)
    logger.info(f"Rolling trade school schema back to {revision}")
    command.downgrade(config, revision)
    logger.info("Rollback complete")


@db_app.command()
def current(ini_path: str = _CONFIG_OPTION) -> None:
    """Print the revision the database schema is at."""
    from alembic import command

    command.current(_alembic_config(ini_path), verbose=True)
