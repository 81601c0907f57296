"""
vps-back — Homebrew Route Handlers
===================================

What:  Public endpoints used by Homebrew bottles.
How:   Formulae set `root_url "https://<this server>/brew/track/<project>"`,
       so each `brew install` fetches `/brew/track/{project}/{filename}`.
       The handler records the download and answers 302 to the GitHub
       release asset.

Error responses (handled by global exception handlers):
    404: unknown project (NotFoundError), nothing is recorded
    400: filename is not `{project}-{version}.{platform}.bottle.tar.gz`
    500: database failure or unusable Location header
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.database import get_db_session
from vps_back.exceptions import HeaderEncodingError
from vps_back.schemas.common import DataResponse, ErrorResponse
from vps_back.services.brew_service import brew_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/brew", tags=["Brew"])


@router.get(
    "/track/{project}/{filename}",
    status_code=302,
    response_class=RedirectResponse,
    responses={
        302: {"description": "Redirect to the release asset"},
        400: {"description": "Unparsable bottle filename", "model": ErrorResponse},
        404: {"description": "Unknown project", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Track a bottle download and redirect to the asset",
)
async def track_brew_download(
    project: str,
    filename: str,
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    logger.info("GET `/brew/track/%s/%s` endpoint called", project, filename)

    redirect_url = await brew_service.track_download(db=db, project=project, filename=filename)

    try:
        return RedirectResponse(url=redirect_url, status_code=302)
    except (UnicodeEncodeError, ValueError) as e:
        raise HeaderEncodingError(
            context={"url": repr(redirect_url), "error_type": type(e).__name__},
        ) from e


@router.get(
    "/stats",
    response_model=DataResponse[Dict[str, Dict[str, Any]]],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Download statistics per project and version",
)
async def get_brew_stats(
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[Dict[str, Dict[str, Any]]]:
    logger.info("GET `/brew/stats` endpoint called")
    stats = await brew_service.get_stats(db)
    return DataResponse[Dict[str, Dict[str, Any]]](data=stats)
