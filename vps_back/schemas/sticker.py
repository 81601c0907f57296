"""
vps-back — Sticker Request/Response Schemas
============================================

What:  API contract for the /secure/stickers endpoints.
Why:   Coordinates are range-checked here so invalid bodies never reach
       the database (FastAPI answers 422).
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class StickerRequest(BaseModel):
    """Body of POST /secure/stickers."""

    name: str = Field(min_length=1, max_length=255, description="Sticker name")
    latitude: float = Field(ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(ge=-180, le=180, description="Longitude in decimal degrees")
    place_name: str = Field(min_length=1, max_length=255, description="Human-readable place")
    pictures: List[str] = Field(default_factory=list, description="Picture URLs")


class StickerResponse(BaseModel):
    id: int
    name: str
    latitude: float
    longitude: float
    place_name: str
    pictures: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StickerPayload(BaseModel):
    """`data` of the single-sticker responses."""

    sticker: StickerResponse


class StickerListPayload(BaseModel):
    """`data` of GET /secure/stickers."""

    stickers: List[StickerResponse]
