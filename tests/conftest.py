"""
vps-back — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_engine:       Async engine on a fresh SQLite file with all tables
    ├── session_factory: Session factory bound to db_engine
    ├── db_session:      One real AsyncSession
    ├── test_client:     HTTPX AsyncClient against the app, get_db_session
    │                    overridden to use session_factory
    └── auth_headers:    x-api-key header accepted by the /secure routes
"""

import os
import tempfile
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any vps_back imports: the settings
# singleton is built when vps_back.config is first imported
_TEST_DIR = tempfile.mkdtemp(prefix="vps_back_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["API_KEY"] = "test-api-key"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STATIC_DIR"] = os.path.join(_TEST_DIR, "static")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from vps_back.database import Base, get_db_session
from vps_back.models.brew_download import DownloadRecord  # noqa: F401
from vps_back.models.source import Source  # noqa: F401
from vps_back.models.sticker import Sticker  # noqa: F401

TEST_API_KEY = "test-api-key"


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session bound to the SQLite dialect.

    Usage:
        async def test_get_sticker(mock_db_session):
            result = MagicMock()
            result.scalar_one_or_none.return_value = None
            mock_db_session.execute = AsyncMock(return_value=result)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    # dialect_insert() looks at the bound dialect to build the upsert
    session.get_bind = MagicMock(return_value=SimpleNamespace(dialect=SimpleNamespace(name="sqlite")))
    return session


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A throwaway SQLite database with every table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth_headers():
    return {"x-api-key": TEST_API_KEY}


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden with the same commit/rollback semantics
    but bound to the per-test SQLite database.

    Usage:
        async def test_stats(test_client):
            response = await test_client.get("/brew/stats")
            assert response.status_code == 200
    """
    from vps_back.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
