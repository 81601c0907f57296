"""
vps-back — Pagination Parameters
=================================

What:  Page/limit query parameters shared by the list endpoints.
How:   Out-of-range values are normalized instead of rejected:
       page 0 → 1, limit 0 → default, limit above MAX_LIMIT → MAX_LIMIT.
"""

from fastapi import Query
from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PaginationParams(BaseModel):
    page: int = Field(default=DEFAULT_PAGE, ge=0, description="Page number (1-indexed)")
    limit: int = Field(default=DEFAULT_LIMIT, ge=0, description="Items per page")

    def normalized(self) -> "PaginationParams":
        """Return a copy with page and limit clamped to usable values."""
        page = self.page or DEFAULT_PAGE
        if self.limit == 0:
            limit = DEFAULT_LIMIT
        else:
            limit = min(self.limit, MAX_LIMIT)
        return PaginationParams(page=page, limit=limit)

    @property
    def offset(self) -> int:
        """Row offset for the database query (0-indexed)."""
        return max(self.page - 1, 0) * self.limit


def get_pagination(
    page: int = Query(default=DEFAULT_PAGE, ge=0, description="Page number (1-indexed)"),
    limit: int = Query(
        default=DEFAULT_LIMIT, ge=0,
        description=f"Items per page (0 means {DEFAULT_LIMIT}, capped at {MAX_LIMIT})",
    ),
) -> PaginationParams:
    """FastAPI dependency: parse and normalize ?page=&limit=."""
    return PaginationParams(page=page, limit=limit).normalized()
