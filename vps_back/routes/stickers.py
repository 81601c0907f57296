"""
vps-back — Sticker Route Handlers
==================================

What:  GET /secure/stickers (list), GET /secure/stickers/{id} (detail),
       POST /secure/stickers (create).
Auth:  x-api-key required on every route of this router.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.database import get_db_session
from vps_back.middleware.auth import require_api_key
from vps_back.pagination import PaginationParams, get_pagination
from vps_back.schemas.common import DataResponse, ErrorResponse, Metadata, PaginatedResponse
from vps_back.schemas.sticker import (
    StickerListPayload,
    StickerPayload,
    StickerRequest,
    StickerResponse,
)
from vps_back.services.sticker_service import sticker_service

logger = logging.getLogger(__name__)

STICKERS_PATH = "/secure/stickers"

router = APIRouter(
    prefix=STICKERS_PATH,
    tags=["Stickers"],
    dependencies=[Depends(require_api_key)],
    responses={401: {"description": "Invalid API key", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=PaginatedResponse[StickerListPayload],
    response_model_exclude_none=True,
    summary="List stickers, newest first",
)
async def get_all_stickers(
    params: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[StickerListPayload]:
    logger.info(
        "GET `%s` endpoint called with page=%d, limit=%d", STICKERS_PATH, params.page, params.limit,
    )

    stickers, total_count = await sticker_service.list_stickers(db, params)

    return PaginatedResponse[StickerListPayload](
        metadata=Metadata.paginated(params.page, params.limit, total_count, STICKERS_PATH),
        data=StickerListPayload(
            stickers=[StickerResponse.model_validate(sticker) for sticker in stickers],
        ),
    )


@router.get(
    "/{sticker_id}",
    response_model=DataResponse[StickerPayload],
    responses={404: {"description": "Sticker not found", "model": ErrorResponse}},
    summary="Get a single sticker by ID",
)
async def get_sticker(
    sticker_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[StickerPayload]:
    logger.info("GET `%s/%d` endpoint called", STICKERS_PATH, sticker_id)

    sticker = await sticker_service.get_sticker(db, sticker_id)

    return DataResponse[StickerPayload](
        data=StickerPayload(sticker=StickerResponse.model_validate(sticker)),
    )


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[StickerPayload],
    summary="Create a sticker",
)
async def create_sticker(
    payload: StickerRequest,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[StickerPayload]:
    logger.info("POST `%s` endpoint called for: %s", STICKERS_PATH, payload.name)

    sticker = await sticker_service.create_sticker(db, payload)

    return DataResponse[StickerPayload](
        data=StickerPayload(sticker=StickerResponse.model_validate(sticker)),
    )
