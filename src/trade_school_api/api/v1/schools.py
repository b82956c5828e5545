"""Trade school API endpoints.

GET /schools, GET /schools/{id}, POST /schools, PUT /schools/{id},
DELETE /schools/{id}, GET /programs, GET /stats.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Response, status
from loguru import logger

from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.dependencies import IdentityClaim, get_school_repository, require_auth
from trade_school_api.core.errors import NotFoundError
from trade_school_api.core.validation import conform_response
from trade_school_api.models.trade_school import TradeSchool
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository
from trade_school_api.schemas.common import ErrorEnvelope, NotFoundResponse, serialize_page
from trade_school_api.schemas.trade_school import (
    PaginatedSchoolResponse,
    ProgramsResponse,
    SchoolCreateRequest,
    SchoolListQuery,
    SchoolResponse,
    SchoolUpdateRequest,
    StatsResponse,
)
from trade_school_api.services.trade_school_service import (
    create_school,
    delete_school,
    get_school,
    get_stats,
    list_programs,
    list_schools,
    update_school,
)

schools_router = APIRouter(tags=["schools"])

SchoolId = Annotated[int, Path(gt=0, description="School id")]

_NOT_FOUND = {404: {"model": NotFoundResponse, "description": "School not found"}}
_INVALID = {400: {"model": ErrorEnvelope, "description": "Validation Error"}}
_UNAUTHORIZED = {401: {"model": ErrorEnvelope, "description": "Missing, invalid or expired token"}}


def _school_payload(school: TradeSchool) -> dict[str, Any]:
    return SchoolResponse.model_validate(school).model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Public read endpoints
# ---------------------------------------------------------------------------


@schools_router.get(
    "/schools",
    responses={200: {"model": PaginatedSchoolResponse}, **_INVALID},
)
async def list_all_schools(
    query: Annotated[SchoolListQuery, Query()],
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """List trade schools, optionally filtered by program and location."""
    page = await list_schools(
        repo,
        program=query.program,
        location=query.location,
        page=query.page,
        limit=query.limit if query.limit is not None else settings.pagination_default_limit,
        max_limit=settings.pagination_max_limit,
    )
    return conform_response(PaginatedSchoolResponse, serialize_page(page, SchoolResponse))


@schools_router.get(
    "/schools/{school_id}",
    responses={200: {"model": SchoolResponse}, **_NOT_FOUND, **_INVALID},
)
async def get_school_detail(
    school_id: SchoolId,
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> dict:
    """Get a single trade school by id."""
    school = await get_school(repo, school_id)
    if school is None:
        raise NotFoundError("School")
    return _school_payload(school)


@schools_router.get("/programs", responses={200: {"model": ProgramsResponse}})
async def list_all_programs(
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> dict:
    """List every distinct program offered across all schools."""
    programs = await list_programs(repo)
    return conform_response(ProgramsResponse, {"count": len(programs), "programs": programs})


@schools_router.get("/stats", responses={200: {"model": StatsResponse}})
async def directory_stats(
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> dict:
    """Return school and program counts."""
    stats = await get_stats(repo)
    return conform_response(StatsResponse, StatsResponse(**stats).model_dump(by_alias=True))


# ---------------------------------------------------------------------------
# Authenticated write endpoints
# ---------------------------------------------------------------------------


@schools_router.post(
    "/schools",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": SchoolResponse}, **_INVALID, **_UNAUTHORIZED},
)
async def create_school_endpoint(
    body: SchoolCreateRequest,
    identity: Annotated[IdentityClaim, Depends(require_auth)],
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> dict:
    """Create a new trade school. Requires a bearer token."""
    school = await create_school(
        repo,
        name=body.name,
        location=body.location,
        programs=body.programs,
        website=str(body.website),
        accredited=body.accredited,
    )
    logger.info(f"User {identity.username} created school {school.id}")
    return _school_payload(school)


@schools_router.put(
    "/schools/{school_id}",
    responses={200: {"model": SchoolResponse}, **_NOT_FOUND, **_INVALID, **_UNAUTHORIZED},
)
async def update_school_endpoint(
    school_id: SchoolId,
    body: SchoolUpdateRequest,
    identity: Annotated[IdentityClaim, Depends(require_auth)],
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> dict:
    """Partially update a trade school. Requires a bearer token."""
    updates = body.model_dump(exclude_unset=True)
    # Convert HttpUrl to string for storage
    if updates.get("website") is not None:
        updates["website"] = str(updates["website"])
    school = await update_school(repo, school_id, data=updates)
    if school is None:
        raise NotFoundError("School")
    logger.info(f"User {identity.username} updated school {school_id}")
    return _school_payload(school)


@schools_router.delete(
    "/schools/{school_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**_NOT_FOUND, **_UNAUTHORIZED},
)
async def delete_school_endpoint(
    school_id: SchoolId,
    identity: Annotated[IdentityClaim, Depends(require_auth)],
    repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
) -> Response:
    """Delete a trade school. Requires a bearer token."""
    if not await delete_school(repo, school_id):
        raise NotFoundError("School")
    logger.info(f"User {identity.username} deleted school {school_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
