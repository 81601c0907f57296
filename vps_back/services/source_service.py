"""
vps-back — Source Counter Service
==================================

What:  Counts how often each referrer ("source") is reported.
How:   Same atomic upsert as the brew counter, keyed by the unique `name`:
       INSERT ... ON CONFLICT (name) DO UPDATE SET count = count + 1 RETURNING count
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.database import dialect_insert
from vps_back.exceptions import DatabaseError, ValidationError
from vps_back.models.source import Source
from vps_back.pagination import PaginationParams

logger = logging.getLogger(__name__)


class SourceService:
    """Business logic for the /secure/source endpoints."""

    async def increment_source(self, db: AsyncSession, name: str) -> int:
        """
        Add one to the counter for `name`, creating it at 1, and return the new count.

        Raises:
            ValidationError: blank source name (→ 400)
            DatabaseError:   upsert or commit failed (→ 500)
        """
        name = name.strip()
        if not name:
            raise ValidationError(message="Source name must not be empty", field="source")

        now = datetime.now(timezone.utc)
        stmt = (
            dialect_insert(db, Source)
            .values(name=name, count=1, created_at=now, updated_at=now)
            .on_conflict_do_update(
                index_elements=["name"],
                set_={"count": Source.count + 1, "updated_at": now},
            )
            .returning(Source.count)
        )

        try:
            result = await db.execute(stmt)
            count = result.scalar_one()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to increment source '%s': %s", name, str(e))
            raise DatabaseError(
                message="Failed to update source counter",
                context={"source": name, "error_type": type(e).__name__},
            ) from e

        return count

    async def list_sources(
        self,
        db: AsyncSession,
        params: PaginationParams,
    ) -> Tuple[Dict[str, int], int]:
        """
        Return one page of name → count, ordered by name, plus the total number of sources.
        """
        try:
            count_result = await db.execute(select(func.count(Source.id)))
            total_count = count_result.scalar() or 0

            result = await db.execute(
                select(Source)
                .order_by(Source.name)
                .offset(params.offset)
                .limit(params.limit)
            )
            sources = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing sources: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch sources",
                context={"error_type": type(e).__name__},
            ) from e

        return {source.name: source.count for source in sources}, total_count


source_service = SourceService()
