"""Root API router with the configurable prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from trade_school_api.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware, setup_cors
from trade_school_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the resource router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Router mounted under ``settings.api_prefix``.
    """
    from trade_school_api.api.v1.auth import router as auth_router
    from trade_school_api.api.v1.schools import schools_router
    from trade_school_api.api.v1.students import students_router

    root_router = APIRouter(prefix=settings.api_prefix)
    root_router.include_router(auth_router)
    root_router.include_router(schools_router)
    root_router.include_router(students_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    setup_cors(app, settings)
