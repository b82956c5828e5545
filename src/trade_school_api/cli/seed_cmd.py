"""CLI command for loading the starter directory data.

``trade-school-api seed`` inserts the bundled list of trade schools (each
passed through the same validation as ``POST /schools``) and creates a
default ``admin`` account when none exists.
"""

import asyncio
from typing import Any

import typer

SEED_SCHOOLS: list[dict[str, Any]] = [
    {
        "name": "Lincoln Tech",
        "location": "Multiple Locations",
        "programs": ["Automotive Technology", "HVAC", "Electrical Technology", "Welding"],
        "website": "https://www.lincolntech.edu",
        "accredited": True,
    },
    {
        "name": "Universal Technical Institute",
        "location": "Nationwide",
        "programs": ["Automotive", "Diesel & Truck", "Motorcycle", "Marine", "CNC Machining"],
        "website": "https://www.uti.edu",
        "accredited": True,
    },
    {
        "name": "Mike Rowe WORKS Foundation",
        "location": "Various Partners",
        "programs": ["Skilled Trades", "Construction", "Manufacturing"],
        "website": "https://www.mikeroweworks.org",
        "accredited": True,
    },
    {
        "name": "Tulsa Welding School",
        "location": "Tulsa, Jacksonville, Houston",
        "programs": ["Welding", "Pipefitting", "HVAC/R", "Electrical"],
        "website": "https://www.tws.edu",
        "accredited": True,
    },
    {
        "name": "Advanced Technology Institute",
        "location": "Virginia Beach, VA",
        "programs": ["Automotive", "HVAC", "Industrial Maintenance", "Medical"],
        "website": "https://www.auto.edu",
        "accredited": True,
    },
    {
        "name": "Midwest Technical Institute",
        "location": "Illinois",
        "programs": ["Automotive", "Diesel", "Collision Repair", "Industrial Maintenance"],
        "website": "https://www.midwesttech.edu",
        "accredited": True,
    },
    {
        "name": "Porter and Chester Institute",
        "location": "Connecticut, Massachusetts",
        "programs": ["Automotive", "HVAC/R", "Electrical", "Plumbing", "CAD"],
        "website": "https://www.porterchester.edu",
        "accredited": True,
    },
    {
        "name": "New England Tractor Trailer Training School",
        "location": "Multiple Locations",
        "programs": ["CDL Training", "Truck Driving"],
        "website": "https://www.nettts.com",
        "accredited": True,
    },
]

DEFAULT_ADMIN_USERNAME = "admin"


def seed(
    clear: bool = typer.Option(
        True,
        "--clear/--no-clear",
        help="Delete existing schools (and their students) before inserting",
    ),
    admin_password: str = typer.Option(
        "password123",
        "--admin-password",
        envvar="SEED_ADMIN_PASSWORD",
        help="Password for the default admin account",
    ),
) -> None:
    """Load the starter trade schools and the default admin user."""
    asyncio.run(_seed(clear=clear, admin_password=admin_password))


async def _seed(*, clear: bool, admin_password: str) -> None:
    """Async implementation of the seed command."""
    from loguru import logger
    from sqlalchemy import delete

    from trade_school_api.core.config import get_settings
    from trade_school_api.core.database import dispose_engine, get_session_factory, init_engine
    from trade_school_api.core.validation import validate_part
    from trade_school_api.models.trade_school import TradeSchool
    from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository
    from trade_school_api.schemas.trade_school import SchoolCreateRequest
    from trade_school_api.services.auth_service import create_user, get_user_by_username
    from trade_school_api.services.trade_school_service import create_school

    # Validate everything up front so a bad record aborts before any write
    requests = [validate_part(SchoolCreateRequest, raw) for raw in SEED_SCHOOLS]

    settings = get_settings()
    init_engine(settings.database_url)

    try:
        factory = get_session_factory()
        if clear:
            async with factory() as session:
                result = await session.execute(delete(TradeSchool))
                await session.commit()
            typer.echo(f"Cleared {result.rowcount} existing trade schools")

        repo = TradeSchoolRepository(factory)
        for request in requests:
            await create_school(
                repo,
                name=request.name,
                location=request.location,
                programs=request.programs,
                website=str(request.website),
                accredited=request.accredited,
            )
        typer.echo(f"Seeded {len(requests)} trade schools")

        async with factory() as session:
            if await get_user_by_username(session, DEFAULT_ADMIN_USERNAME) is None:
                await create_user(session, DEFAULT_ADMIN_USERNAME, admin_password)
                typer.echo(f"Created default user '{DEFAULT_ADMIN_USERNAME}'. Change its password in production!")
            else:
                typer.echo(f"User '{DEFAULT_ADMIN_USERNAME}' already exists, skipping user creation")
    except Exception:
        logger.exception("Seeding failed")
        raise typer.Exit(code=1) from None
    finally:
        await dispose_engine()
