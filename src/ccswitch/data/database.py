"""Async engine, session factory and schema setup."""

import os
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# set DATABASE_URL to use another database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./ccswitch.db")


def get_engine(database_url: str | None = None, **kwargs: Any) -> AsyncEngine:
    """
    Build an engine for ``database_url``, defaulting to ``DATABASE_URL``.

    SQLite URLs get a NullPool and the connection hooks below.
    """
    url = database_url or DATABASE_URL

    if url.startswith("sqlite"):
        kwargs.setdefault("poolclass", NullPool)

    async_engine = create_async_engine(url, echo=False, **kwargs)
    if url.startswith("sqlite"):
        _configure_sqlite(async_engine)
    return async_engine


def _configure_sqlite(async_engine: AsyncEngine) -> None:
    """
    Enable foreign keys and let SQLAlchemy own transaction boundaries.

    The sqlite3 driver opens transactions lazily on its own, which breaks
    SAVEPOINTs; emitting BEGIN ourselves makes nested transactions work.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def _make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = get_engine()

AsyncSessionLocal = _make_sessionmaker(engine)


def configure_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """
    Point the global engine and session factory at another database.

    Used by tests to run against a throwaway database.

    Args:
        database_url: Database URL to connect to.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        The newly configured engine.
    """
    global engine, AsyncSessionLocal

    engine = get_engine(database_url, **kwargs)
    AsyncSessionLocal = _make_sessionmaker(engine)
    return engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    """Create any missing tables."""
    from ccswitch.data.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of pooled connections."""
    await engine.dispose()
