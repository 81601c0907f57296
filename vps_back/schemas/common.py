"""
vps-back — Shared Response Envelopes
=====================================

What:  Pydantic models for the envelopes every endpoint shares.
Why:   Clients parse one structure regardless of resource.

Envelopes:
    Success:    {"data": ...}
    Paginated:  {"_metadata": {...}, "data": ...}
    Error:      {"error": {"code": "...", "message": "..."}, "request_id": "..."}

Fields that are None are left out of the JSON (routes set
response_model_exclude_none=True).
"""

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════
# Pagination Metadata
# ══════════════════════════════════════════════════════════════════════════


class Links(BaseModel):
    """Navigation links for a paginated listing, e.g. `/secure/stickers?page=2&limit=20`."""

    model_config = ConfigDict(populate_by_name=True)

    self_link: str = Field(alias="self", description="Path of the listed collection")
    next: Optional[str] = Field(default=None, description="Next page, absent on the last page")
    prev: Optional[str] = Field(default=None, description="Previous page, absent on the first page")


class Metadata(BaseModel):
    """
    What:  Pagination state returned under `_metadata`.

    page_count is the number of items on the current page, not the
    number of pages.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: Optional[int] = None
    limit: Optional[int] = None
    page_count: Optional[int] = None
    total_pages: Optional[int] = None
    total_count: Optional[int] = None
    links: Optional[Links] = Field(default=None, alias="_links")

    @classmethod
    def paginated(cls, page: int, limit: int, total_count: int, self_link: str) -> "Metadata":
        """Build metadata for `page` (1-indexed) of a collection with `total_count` items."""
        total_pages = math.ceil(total_count / limit) if limit else 0
        if page < total_pages:
            page_count = limit
        else:
            page_count = max(total_count - (page - 1) * limit, 0)

        next_link = None
        if page < total_pages:
            next_link = f"{self_link}?page={page + 1}&limit={limit}"
        prev_link = None
        if page > 1:
            prev_link = f"{self_link}?page={page - 1}&limit={limit}"

        return cls(
            page=page,
            limit=limit,
            page_count=page_count,
            total_pages=total_pages,
            total_count=total_count,
            links=Links(self_link=self_link, next=next_link, prev=prev_link),
        )


# ══════════════════════════════════════════════════════════════════════════
# Success Envelopes
# ══════════════════════════════════════════════════════════════════════════


class DataResponse(BaseModel, Generic[T]):
    """`{"data": ...}`"""

    data: T


class PaginatedResponse(BaseModel, Generic[T]):
    """`{"_metadata": {...}, "data": ...}`"""

    model_config = ConfigDict(populate_by_name=True)

    metadata: Metadata = Field(alias="_metadata")
    data: T


class MessagePayload(BaseModel):
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Error Envelope
# ══════════════════════════════════════════════════════════════════════════


class ErrorBody(BaseModel):
    code: str = Field(description="Machine-readable error code, e.g. not_found")
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response for all application errors.

    Example:
        {
            "error": {"code": "validation_error",
                      "message": "Could not parse filename: rona.tar.gz"},
            "request_id": "1f0c2a9e"
        }
    """

    error: ErrorBody
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
