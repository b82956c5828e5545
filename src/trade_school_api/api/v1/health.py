"""Unprefixed service endpoints: GET / and GET /health."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from trade_school_api import __version__
from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.dependencies import get_school_repository
from trade_school_api.core.validation import conform_response
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository
from trade_school_api.schemas.trade_school import HealthResponse
from trade_school_api.services.trade_school_service import health_check

health_router = APIRouter(tags=["health"])


@health_router.get("/", status_code=200)
async def root(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Describe the API and its main endpoints."""
    prefix = settings.api_prefix
    return {
        "message": "Trade School API",
        "version": __version__,
        "environment": settings.environment,
        "endpoints": {
            "schools": f"{prefix}/schools",
            "schoolById": f"{prefix}/schools/:id",
            "schoolStudents": f"{prefix}/schools/:uuid/students",
            "students": f"{prefix}/students",
            "programs": f"{prefix}/programs",
            "stats": f"{prefix}/stats",
            "login": f"{prefix}/auth/login",
            "logout": f"{prefix}/auth/logout",
            "health": "/health",
        },
    }


@health_router.get(
    "/health",
    responses={200: {"model": HealthResponse}, 503: {"model": HealthResponse}},
)
async def health(
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> JSONResponse:
    """Health check endpoint (no authentication required)."""
    healthy = await health_check(repo)
    payload = {
        "status": "healthy" if healthy else "unhealthy",
        "database": "connected" if healthy else "disconnected",
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(
        status_code=200 if healthy else 503,
        content=conform_response(HealthResponse, payload),
    )
