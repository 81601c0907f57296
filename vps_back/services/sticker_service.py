"""
vps-back — Sticker Service
===========================

What:  List, fetch and create stickers.
Who:   Called by the /secure/stickers route handlers.

Writes are flushed here and committed by `get_db_session` once the
handler returns, as for any plain insert.
"""

import logging
from typing import List, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.exceptions import DatabaseError, NotFoundError
from vps_back.models.sticker import Sticker
from vps_back.pagination import PaginationParams
from vps_back.schemas.sticker import StickerRequest

logger = logging.getLogger(__name__)


class StickerService:
    """
    Business logic layer for sticker operations.

    Error Handling Strategy:
        SQLAlchemy errors are wrapped in DatabaseError (hides internal
        details); a missing row becomes NotFoundError.
    """

    async def list_stickers(
        self,
        db: AsyncSession,
        params: PaginationParams,
    ) -> Tuple[List[Sticker], int]:
        """One page of stickers, newest first, plus the total count."""
        try:
            count_result = await db.execute(select(func.count(Sticker.id)))
            total_count = count_result.scalar() or 0

            result = await db.execute(
                select(Sticker)
                .order_by(desc(Sticker.created_at), desc(Sticker.id))
                .offset(params.offset)
                .limit(params.limit)
            )
            stickers = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing stickers: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch stickers from database",
                context={"error_type": type(e).__name__},
            ) from e

        return stickers, total_count

    async def get_sticker(self, db: AsyncSession, sticker_id: int) -> Sticker:
        """
        Raises:
            NotFoundError: no sticker with this id (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(select(Sticker).where(Sticker.id == sticker_id))
            sticker = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching sticker %s: %s", sticker_id, str(e))
            raise DatabaseError(
                message=f"Failed to fetch sticker with id {sticker_id}",
                context={"sticker_id": sticker_id, "error_type": type(e).__name__},
            ) from e

        if sticker is None:
            raise NotFoundError(
                message=f"Sticker with id {sticker_id} not found",
                context={"sticker_id": sticker_id},
            )
        return sticker

    async def create_sticker(self, db: AsyncSession, request: StickerRequest) -> Sticker:
        """Insert a sticker; the flush assigns its id."""
        sticker = Sticker(
            name=request.name,
            latitude=request.latitude,
            longitude=request.longitude,
            place_name=request.place_name,
            pictures=list(request.pictures),
        )
        try:
            db.add(sticker)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to insert sticker '%s': %s", request.name, str(e))
            raise DatabaseError(
                message="Failed to insert new sticker into database",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Sticker %s created at %s", sticker.id, sticker.place_name)
        return sticker


sticker_service = StickerService()
