"""
vps-back — Source Service Unit Tests
=====================================

What we test:
    ✅ First report of a source creates it at 1, later reports increment
    ✅ Names are stripped before counting, blank names are rejected
    ✅ Listing is ordered by name and paginated
    ✅ Database failures surface as DatabaseError
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from vps_back.exceptions import DatabaseError, ValidationError
from vps_back.pagination import PaginationParams
from vps_back.services.source_service import SourceService


class TestIncrementSource:

    def setup_method(self):
        self.service = SourceService()

    @pytest.mark.asyncio
    async def test_increment_counts_up(self, db_session):
        assert await self.service.increment_source(db_session, "github") == 1
        assert await self.service.increment_source(db_session, "github") == 2
        assert await self.service.increment_source(db_session, "linkedin") == 1

    @pytest.mark.asyncio
    async def test_name_is_stripped(self, db_session):
        await self.service.increment_source(db_session, "github")
        assert await self.service.increment_source(db_session, "  github \n") == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    async def test_blank_name_rejected(self, mock_db_session, name):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.increment_source(mock_db_session, name)

        assert exc_info.value.field == "source"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")),
        )

        with pytest.raises(DatabaseError):
            await self.service.increment_source(mock_db_session, "github")


class TestListSources:

    def setup_method(self):
        self.service = SourceService()

    @pytest.mark.asyncio
    async def test_list_is_ordered_and_paginated(self, db_session):
        for name in ["zulu", "alpha", "mike", "alpha"]:
            await self.service.increment_source(db_session, name)

        first_page, total = await self.service.list_sources(
            db_session, PaginationParams(page=1, limit=2),
        )
        second_page, _ = await self.service.list_sources(
            db_session, PaginationParams(page=2, limit=2),
        )

        assert total == 3
        assert list(first_page.items()) == [("alpha", 2), ("mike", 1)]
        assert second_page == {"zulu": 1}

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        sources, total = await self.service.list_sources(db_session, PaginationParams())
        assert sources == {}
        assert total == 0
