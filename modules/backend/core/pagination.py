"""
Pagination Utilities.

Page-number pagination for list endpoints. The HTTP layer speaks in
``page``/``limit``; repositories speak in ``limit``/``offset``. The
total count is always computed by a separate COUNT query, never derived
from the size of the returned page.
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import Query

from modules.backend.core.config import get_app_config
from modules.backend.core.exceptions import ValidationError

T = TypeVar("T")

# With max_limit capped at the same value, (page - 1) * limit fits a 64-bit OFFSET
MAX_PAGE = 2**31 - 1


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass(frozen=True)
class PaginationParams:
    """Pagination parameters extracted from the query string."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        """Number of rows to skip for this page."""
        return (self.page - 1) * self.limit


def get_pagination_params(
    page: int = Query(
        default=1,
        ge=1,
        le=MAX_PAGE,
        description="1-based page number",
    ),
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of items to return (defaults to pagination.default_limit)",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    Defaults and the upper bound for ``limit`` come from application.yaml.

    Usage:
        @router.get("/items")
        async def list_items(
            pagination: PaginationParams = Depends(get_pagination_params),
        ):
            ...

    Raises:
        ValidationError: If limit exceeds pagination.max_limit
    """
    pagination_config = get_app_config().application.pagination

    if limit is None:
        limit = pagination_config.default_limit
    if limit > pagination_config.max_limit:
        raise ValidationError(
            "limit too large",
            details={"limit": f"Maximum is {pagination_config.max_limit}"},
        )

    return PaginationParams(page=page, limit=limit)


# =============================================================================
# Paged Result
# =============================================================================


def total_pages(total: int, limit: int) -> int:
    """
    Number of pages needed to show ``total`` items ``limit`` at a time.

    A zero limit has no meaningful page count and yields 0.
    """
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


@dataclass
class PagedResult(Generic[T]):
    """
    One page of a list query plus the total size of the unpaged list.

    ``items`` and ``total`` come from two separate queries and may
    disagree slightly if rows are inserted or deleted in between.
    """

    items: list[T]
    total: int
    limit: int
    offset: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total
