"""Offset pagination helpers shared by every list endpoint.

Page and limit arrive from clients as-is; ``validate_pagination_params``
clamps them into range instead of rejecting them.  The count and data reads
of a page are independent, so ``execute_paginated_query`` runs them
concurrently and joins them before building the result.
"""

import asyncio
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 15
DEFAULT_MAX_LIMIT = 100


@dataclass(frozen=True)
class PageMeta:
    """Pagination metadata for one page of results."""

    total: int
    page: int
    limit: int
    last_page: int
    has_next_page: bool
    has_previous_page: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus its metadata."""

    data: list[T]
    meta: PageMeta


def validate_pagination_params(page: int, limit: int, max_limit: int = DEFAULT_MAX_LIMIT) -> tuple[int, int]:
    """Clamp page and limit into their valid ranges.

    Out-of-range input is silently corrected, never rejected.

    Args:
        page: Requested page number (1-based).
        limit: Requested records per page.
        max_limit: Largest allowed limit.

    Returns:
        Tuple of (page, limit) with ``page >= 1`` and ``1 <= limit <= max_limit``.
    """
    valid_page = max(1, page)
    valid_limit = min(max(1, limit), max_limit)
    return valid_page, valid_limit


def calculate_skip(page: int, limit: int) -> int:
    """Return the number of rows to skip for a 1-based page."""
    return (page - 1) * limit


def calculate_pagination_metadata(total: int, page: int, limit: int) -> PageMeta:
    """Build page metadata from a total count.

    Args:
        total: Total number of matching records.
        page: Current page number.
        limit: Records per page.

    Returns:
        PageMeta where ``last_page`` is ``ceil(total / limit)``.
    """
    last_page = math.ceil(total / limit)
    return PageMeta(
        total=total,
        page=page,
        limit=limit,
        last_page=last_page,
        has_next_page=page < last_page,
        has_previous_page=page > 1,
    )


def create_paginated_response(data: Sequence[T], total: int, page: int, limit: int) -> Page[T]:
    """Wrap fetched records and their total count into a Page."""
    return Page(data=list(data), meta=calculate_pagination_metadata(total, page, limit))


async def execute_paginated_query(
    *,
    count_query: Callable[[], Awaitable[int]],
    data_query: Callable[[], Awaitable[Sequence[T]]],
    page: int,
    limit: int,
) -> Page[T]:
    """Run the count and data reads concurrently and assemble a Page.

    Both callables must be independent reads.  If either raises, the error
    propagates unchanged and no page is built.

    Args:
        count_query: Zero-argument coroutine factory returning the total count.
        data_query: Zero-argument coroutine factory returning the page rows.
        page: Page number already passed through ``validate_pagination_params``.
        limit: Limit already passed through ``validate_pagination_params``.

    Returns:
        The assembled Page.
    """
    total, data = await asyncio.gather(count_query(), data_query())
    return create_paginated_response(data, total, page, limit)
