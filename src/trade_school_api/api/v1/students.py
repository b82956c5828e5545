"""Student listing endpoints.

GET /students, GET /schools/{uuid}/students.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from trade_school_api.core.config import Settings, get_settings
from trade_school_api.core.dependencies import get_school_repository, get_student_repository
from trade_school_api.core.errors import NotFoundError
from trade_school_api.core.validation import conform_response
from trade_school_api.repositories.student_repository import StudentRepository
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository
from trade_school_api.schemas.common import ErrorEnvelope, NotFoundResponse, PaginationQuery, serialize_page
from trade_school_api.schemas.student import PaginatedStudentResponse, StudentListQuery, StudentResponse
from trade_school_api.services.student_service import list_students, list_students_by_school

students_router = APIRouter(tags=["students"])


@students_router.get(
    "/students",
    responses={200: {"model": PaginatedStudentResponse}, 400: {"model": ErrorEnvelope}},
)
async def list_all_students(
    query: Annotated[StudentListQuery, Query()],
    repo: Annotated[StudentRepository, Depends(get_student_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """List students, optionally filtered by program and enrollment status."""
    page = await list_students(
        repo,
        enrolled_program=query.enrolled_program,
        status=query.status.value if query.status is not None else None,
        page=query.page,
        limit=query.limit if query.limit is not None else settings.pagination_default_limit,
        max_limit=settings.pagination_max_limit,
    )
    return conform_response(PaginatedStudentResponse, serialize_page(page, StudentResponse))


@students_router.get(
    "/schools/{school_uuid}/students",
    responses={
        200: {"model": PaginatedStudentResponse},
        400: {"model": ErrorEnvelope},
        404: {"model": NotFoundResponse},
    },
)
async def list_school_students(
    school_uuid: Annotated[uuid.UUID, Path(description="Public UUID of the school")],
    query: Annotated[PaginationQuery, Query()],
    repo: Annotated[StudentRepository, Depends(get_student_repository)],
    school_repo: Annotated[TradeSchoolRepository, Depends(get_school_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """List the students enrolled at one school."""
    if await school_repo.find_by_uuid(school_uuid) is None:
        raise NotFoundError("School")
    page = await list_students_by_school(
        repo,
        school_uuid,
        page=query.page,
        limit=query.limit if query.limit is not None else settings.pagination_default_limit,
        max_limit=settings.pagination_max_limit,
    )
    return conform_response(PaginatedStudentResponse, serialize_page(page, StudentResponse))
