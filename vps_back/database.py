"""
vps-back — Database Session Management
=======================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Supported backends:
    postgresql+asyncpg  : production
    sqlite+aiosqlite    : local development and the test suite

    Both dialects support INSERT ... ON CONFLICT DO UPDATE, which the counter
    services rely on for atomic increments (see `dialect_insert`).
"""

from typing import Any, AsyncGenerator, Callable, Dict

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vps_back.config import settings
from vps_back.exceptions import DatabaseError


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,

    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, which the
# services need when they build responses from freshly written rows
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they register with a single
    metadata object, which Alembic reads for migrations.
    """
    pass


# ── Dialect-aware INSERT ──────────────────────────────────────────────────
_INSERT_BY_DIALECT: Dict[str, Callable[..., Any]] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: AsyncSession, model: Any) -> Any:
    """
    Return an INSERT construct that supports `on_conflict_do_update`.

    What:  Picks the PostgreSQL or SQLite flavour of `insert()` based on the
           dialect the session is bound to.
    Why:   The generic `sqlalchemy.insert` has no upsert clause; both dialect
           variants share the same `on_conflict_do_update(...)` signature.

    Raises:
        DatabaseError: the session is bound to a dialect without upsert support.
    """
    dialect_name = db.get_bind().dialect.name
    insert_factory = _INSERT_BY_DIALECT.get(dialect_name)
    if insert_factory is None:
        raise DatabaseError(
            context={"reason": "unsupported dialect for upsert", "dialect": dialect_name},
        )
    return insert_factory(model)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction (saves changes)
        4. On error: rolls back the transaction (discards changes)
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/stickers")
        async def list_stickers(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exceptions are propagated to the global error handler.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Roll back for ANY failure, including non-DB errors raised by
            # the handler after a write
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called from the application lifespan on shutdown."""
    await engine.dispose()
