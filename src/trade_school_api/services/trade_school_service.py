"""Trade school service -- filtered listing, CRUD, programs and statistics.

All datastore access goes through a ``TradeSchoolRepository``.  The
repository's not-found signal on update/delete is translated here into
``None``/``False`` so that it never reaches the global error handler.
"""

from typing import Any

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
from trade_school_api.models.trade_school import TradeSchool
from trade_school_api.repositories.base import RecordNotFoundError
from trade_school_api.repositories.trade_school_repository import TradeSchoolRepository

# Fields that may be set via the update endpoint.  Anything outside this set
# is silently ignored, preventing mass-assignment of ``id`` or ``uuid``.
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "location",
        "programs",
        "website",
        "accredited",
    }
)


def build_school_filters(
    *,
    program: str | None = None,
    location: str | None = None,
) -> list[ColumnElement[bool]]:
    """Build the WHERE predicates for a school listing.

    Args:
        program: Program the school must offer (exact array membership).
        location: Case-insensitive substring of the location.

    Returns:
        Predicates to AND together; empty when no filter is set.
    """
    filters: list[ColumnElement[bool]] = []
    if program:
        filters.append(TradeSchool.programs.contains([program]))
    if location:
        filters.append(TradeSchool.location.icontains(location, autoescape=True))
    return filters


def _unique_sorted(program_lists: list[list[str]]) -> list[str]:
    return sorted({program for programs in program_lists for program in programs})


# ---------------------------------------------------------------------------
# Read operations
# ---------------------------------------------------------------------------


async def list_schools(
    repo: TradeSchoolRepository,
    *,
    program: str | None = None,
    location: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
    max_limit: int = DEFAULT_MAX_LIMIT,
) -> Page[TradeSchool]:
    """List schools matching the filters, one page at a time, ordered by name.

    Args:
        repo: Trade school repository.
        program: Exact program the school must offer.
        location: Case-insensitive location substring.
        page: Requested page (clamped to >= 1).
        limit: Requested page size (clamped to 1..max_limit).
        max_limit: Upper bound for ``limit``.

    Returns:
        A page of schools with pagination metadata.
    """
    valid_page, valid_limit = validate_pagination_params(page, limit, max_limit)
    where = build_school_filters(program=program, location=location)

    result = await execute_paginated_query(
        count_query=lambda: repo.count(where=where),
        data_query=lambda: repo.find_many(
            where=where,
            order_by=[TradeSchool.name.asc()],
            skip=calculate_skip(valid_page, valid_limit),
            take=valid_limit,
        ),
        page=valid_page,
        limit=valid_limit,
    )
    logger.info(f"Listed {len(result.data)} schools (total={result.meta.total}, page={valid_page})")
    return result


async def get_school(repo: TradeSchoolRepository, school_id: int) -> TradeSchool | None:
    """Get a single school by id, or None if absent."""
    return await repo.find_unique(school_id)


async def list_programs(repo: TradeSchoolRepository) -> list[str]:
    """Return every distinct program offered by any school, sorted."""
    programs = _unique_sorted(await repo.find_all_programs())
    logger.info(f"Listed {len(programs)} distinct programs")
    return programs


async def get_stats(repo: TradeSchoolRepository) -> dict[str, int]:
    """Compute directory statistics.

    Returns:
        Dict with ``total_schools``, ``accredited_schools`` and ``total_programs``.
    """
    total_schools = await repo.count()
    accredited_schools = await repo.count(where=[TradeSchool.accredited.is_(True)])
    total_programs = len(_unique_sorted(await repo.find_all_programs()))
    return {
        "total_schools": total_schools,
        "accredited_schools": accredited_schools,
        "total_programs": total_programs,
    }


async def health_check(repo: TradeSchoolRepository) -> bool:
    """Return True iff the database answers a trivial query."""
    try:
        await repo.ping()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
    return True


# ---------------------------------------------------------------------------
# Write operations
# ---------------------------------------------------------------------------


async def create_school(
    repo: TradeSchoolRepository,
    *,
    name: str,
    location: str,
    programs: list[str],
    website: str,
    accredited: bool = True,
) -> TradeSchool:
    """Create a new trade school.

    Args:
        repo: Trade school repository.
        name: School name.
        location: School location.
        programs: Programs offered.
        website: School website URL.
        accredited: Accreditation status, true unless stated otherwise.

    Returns:
        The created school.
    """
    school = await repo.create(
        {
            "name": name,
            "location": location,
            "programs": list(programs),
            "website": website,
            "accredited": accredited,
        }
    )
    logger.info(f"Created school {school.id} ({name})")
    return school


async def update_school(
    repo: TradeSchoolRepository,
    school_id: int,
    *,
    data: dict[str, Any],
) -> TradeSchool | None:
    """Partially update a school.

    Only allowlisted fields with non-null values are applied.

    Args:
        repo: Trade school repository.
        school_id: Id of the school to update.
        data: Field name -> new value.

    Returns:
        The updated school, or None if it does not exist.
    """
    updates = {k: v for k, v in data.items() if k in _UPDATABLE_FIELDS and v is not None}
    try:
        school = await repo.update(school_id, updates)
    except RecordNotFoundError:
        return None
    logger.info(f"Updated school {school_id} ({', '.join(sorted(updates)) or 'no fields'})")
    return school


async def delete_school(repo: TradeSchoolRepository, school_id: int) -> bool:
    """Delete a school.

    Returns:
        True if a school was removed, False if it did not exist.
    """
    try:
        await repo.delete(school_id)
    except RecordNotFoundError:
        return False
    logger.info(f"Deleted school {school_id}")
    return True
