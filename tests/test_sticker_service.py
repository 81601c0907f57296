"""
vps-back — Sticker Service Unit Tests
======================================

What:  Tests for StickerService list/get/create.
How:   Mock sessions for the error paths, a real SQLite session otherwise.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from vps_back.exceptions import DatabaseError, NotFoundError
from vps_back.pagination import PaginationParams
from vps_back.schemas.sticker import StickerRequest
from vps_back.services.sticker_service import StickerService


def _request(name: str = "Eiffel", **overrides) -> StickerRequest:
    fields = {
        "name": name,
        "latitude": 48.8584,
        "longitude": 2.2945,
        "place_name": "Paris",
        "pictures": ["https://example.com/a.jpg"],
    }
    fields.update(overrides)
    return StickerRequest(**fields)


class TestStickerService:

    def setup_method(self):
        self.service = StickerService()

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, db_session):
        sticker = await self.service.create_sticker(db_session, _request())
        await db_session.commit()

        assert sticker.id is not None
        assert sticker.pictures == ["https://example.com/a.jpg"]
        assert sticker.created_at is not None

    @pytest.mark.asyncio
    async def test_get_round_trips(self, db_session):
        created = await self.service.create_sticker(db_session, _request(place_name="Tour Eiffel"))
        await db_session.commit()

        fetched = await self.service.get_sticker(db_session, created.id)

        assert fetched.id == created.id
        assert fetched.place_name == "Tour Eiffel"

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute = AsyncMock(return_value=result)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_sticker(mock_db_session, 42)

        assert exc_info.value.message == "Sticker with id 42 not found"

    @pytest.mark.asyncio
    async def test_list_newest_first(self, db_session):
        for name in ["first", "second", "third"]:
            await self.service.create_sticker(db_session, _request(name=name))
        await db_session.commit()

        stickers, total = await self.service.list_stickers(
            db_session, PaginationParams(page=1, limit=2),
        )

        assert total == 3
        assert [s.name for s in stickers] == ["third", "second"]

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed")),
        )

        with pytest.raises(DatabaseError):
            await self.service.create_sticker(mock_db_session, _request())
