"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from trade_school_api import __version__
from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.database import dispose_engine, init_engine
from trade_school_api.core.errors import register_exception_handlers
from trade_school_api.core.logging import setup_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app with; loaded from the
            environment when omitted. When given, they also replace the
            ``get_settings`` dependency so routes see the same values.

    Returns:
        Configured FastAPI application instance.
    """
    supplied = settings is not None
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Init logging and the engine on startup, dispose on shutdown."""
        setup_logging(settings.log_level, settings.log_dir)
        init_engine(settings.database_url)
        logger.info(f"Trade School API {__version__} starting ({settings.environment})")
        yield
        await dispose_engine()

    app = FastAPI(
        title="Trade School API",
        description="Directory of vocational and trade schools, their programs, and enrolled students",
        version=__version__,
        lifespan=lifespan,
    )

    if supplied:
        app.dependency_overrides[get_settings] = lambda: settings

    register_exception_handlers(app, settings)

    # Register middleware and routers
    from trade_school_api.api.router import create_router, setup_middleware
    from trade_school_api.api.v1.health import health_router

    setup_middleware(app, settings)
    app.include_router(health_router)
    app.include_router(create_router(settings))

    return app
