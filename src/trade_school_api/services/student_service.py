"""Student service -- paginated student listings.

Uses the same pagination engine as the school directory.
"""

import uuid

from loguru import logger
from sqlalchemy import ColumnElement

from trade_school_api.core.pagination import (
    DEFAULT_LIMIT,
    DEFAULT_MAX_LIMIT,
    Page,
    calculate_skip,
    execute_paginated_query,
    validate_pagination_params,
)
from trade_school_api.models.student import Student
from trade_school_api.repositories.student_repository import StudentRepository


def build_student_filters(
    *,
    enrolled_program: str | None = None,
    status: str | None = None,
    school_uuid: uuid.UUID | None = None,
) -> list[ColumnElement[bool]]:
    """Build the WHERE predicates for a student listing."""
    filters: list[ColumnElement[bool]] = []
    if enrolled_program:
        filters.append(Student.enrolled_program.icontains(enrolled_program, autoescape=True))
    if status:
        filters.append(Student.status == status)
    if school_uuid is not None:
        filters.append(Student.school_uuid == school_uuid)
    return filters


async def list_students(
    repo: StudentRepository,
    *,
    enrolled_program: str | None = None,
    status: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
    max_limit: int = DEFAULT_MAX_LIMIT,
) -> Page[Student]:
    """List students ordered by last name, then first name.

    Args:
        repo: Student repository.
        enrolled_program: Case-insensitive substring of the program.
        status: Exact enrollment status.
        page: Requested page (clamped).
        limit: Requested page size (clamped).
        max_limit: Upper bound for ``limit``.

    Returns:
        A page of students.
    """
    valid_page, valid_limit = validate_pagination_params(page, limit, max_limit)
    where = build_student_filters(enrolled_program=enrolled_program, status=status)

    result = await execute_paginated_query(
        count_query=lambda: repo.count(where=where),
        data_query=lambda: repo.find_many(
            where=where,
            order_by=[Student.last_name.asc(), Student.first_name.asc()],
            skip=calculate_skip(valid_page, valid_limit),
            take=valid_limit,
        ),
        page=valid_page,
        limit=valid_limit,
    )
    logger.info(f"Listed {len(result.data)} students (total={result.meta.total}, page={valid_page})")
    return result


async def list_students_by_school(
    repo: StudentRepository,
    school_uuid: uuid.UUID,
    *,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
    max_limit: int = DEFAULT_MAX_LIMIT,
) -> Page[Student]:
    """List the students of one school ordered by last name."""
    valid_page, valid_limit = validate_pagination_params(page, limit, max_limit)
    where = build_student_filters(school_uuid=school_uuid)

    return await execute_paginated_query(
        count_query=lambda: repo.count(where=where),
        data_query=lambda: repo.find_many(
            where=where,
            order_by=[Student.last_name.asc()],
            skip=calculate_skip(valid_page, valid_limit),
            take=valid_limit,
        ),
        page=valid_page,
        limit=valid_limit,
    )
