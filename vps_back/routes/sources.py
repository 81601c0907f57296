"""
vps-back — Source Counter Route Handlers
=========================================

What:  GET/POST /secure/source, the referrer counters.
Who:   Called by the personal website whenever a visitor arrives with a
       known referrer, and by the dashboard listing them.
Auth:  x-api-key required on every route of this router.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.database import get_db_session
from vps_back.middleware.auth import require_api_key
from vps_back.pagination import PaginationParams, get_pagination
from vps_back.schemas.common import DataResponse, ErrorResponse, Metadata, PaginatedResponse
from vps_back.schemas.source import SourceListPayload, SourceRequest
from vps_back.services.source_service import source_service

logger = logging.getLogger(__name__)

SOURCE_PATH = "/secure/source"

router = APIRouter(
    prefix=SOURCE_PATH,
    tags=["Sources"],
    dependencies=[Depends(require_api_key)],
    responses={401: {"description": "Invalid API key", "model": ErrorResponse}},
)


@router.get(
    "",
    response_model=PaginatedResponse[SourceListPayload],
    response_model_exclude_none=True,
    summary="List source counters",
)
async def get_all_sources(
    params: PaginationParams = Depends(get_pagination),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[SourceListPayload]:
    logger.info(
        "GET `%s` endpoint called with page=%d, limit=%d", SOURCE_PATH, params.page, params.limit,
    )

    sources, total_count = await source_service.list_sources(db, params)

    return PaginatedResponse[SourceListPayload](
        metadata=Metadata.paginated(params.page, params.limit, total_count, SOURCE_PATH),
        data=SourceListPayload(sources=sources),
    )


@router.post(
    "",
    response_model=DataResponse[Dict[str, int]],
    responses={400: {"description": "Blank source name", "model": ErrorResponse}},
    summary="Increment a source counter",
)
async def increment_source(
    payload: SourceRequest,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[Dict[str, int]]:
    logger.info("POST `%s` endpoint called for: %s", SOURCE_PATH, payload.source)

    count = await source_service.increment_source(db, payload.source)

    return DataResponse[Dict[str, int]](data={payload.source.strip(): count})
