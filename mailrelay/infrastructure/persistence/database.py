"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (see migrations/). PostgreSQL via
asyncpg in production; SQLite via aiosqlite for local runs and tests.

Engine and session factory are created lazily on first use (get_db /
get_db_transactional) so import does not trigger Settings validation.
"""

import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from mailrelay.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores ON DELETE clauses unless foreign_keys is switched on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
    }
    if settings.is_sqlite:
        engine = create_async_engine(settings.database_url, **engine_kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        pool_size = settings.db_pool_size if settings.db_pool_size is not None else 10
        max_overflow = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 20
        )
        command_timeout = (
            settings.db_command_timeout
            if settings.db_command_timeout is not None
            else 60
        )
        connect_args: dict[str, Any] = {}
        if "asyncpg" in settings.database_url:
            connect_args["command_timeout"] = command_timeout
        engine = create_async_engine(
            settings.database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
            connect_args=connect_args,
            **engine_kwargs,
        )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory, creating the engine if needed (scripts, lifespan)."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine and forget it so the next use rebuilds from settings."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes. Services that must
    commit before calling out (e.g. before sending mail) commit on this
    session explicitly.
    Yields a session and closes it on exit.
    """
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    factory = get_session_factory()
    async with factory() as session:
        async with session.begin():
            yield session
