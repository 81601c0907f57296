"""
vps-back — Source Request/Response Schemas
===========================================

What:  API contract for the /secure/source endpoints.

The increment response is keyed by the source name itself
(`{"data": {"newsletter": 12}}`), so it is returned as a plain dict
rather than a fixed model.
"""

from typing import Dict

from pydantic import BaseModel, Field


class SourceRequest(BaseModel):
    """Body of POST /secure/source."""

    source: str = Field(max_length=255, description="Referrer name to count")


class SourceListPayload(BaseModel):
    """`data` of GET /secure/source: name → count for the requested page."""

    sources: Dict[str, int]
