"""Tests for database configuration and operations."""

from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from ccswitch.data import database
from ccswitch.data.database import get_engine


class TestDatabaseConnection:
    """Test database connection and session management."""

    async def test_get_engine_creates_engine(self) -> None:
        """Test that get_engine creates a valid engine."""
        engine = get_engine("sqlite+aiosqlite:///:memory:")
        assert engine is not None
        await engine.dispose()

    async def test_sqlite_foreign_keys_enabled(self, tmp_path: Path) -> None:
        """SQLite connections enforce foreign keys."""
        engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'fk.db'}")
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))
            assert result.scalar_one() == 1
        await engine.dispose()


class TestInitDb:
    """Test schema creation through the configured engine."""

    async def test_init_db_creates_tables(self, tmp_path: Path) -> None:
        """init_db creates every table on the configured engine."""
        engine = database.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'init.db'}")
        await database.init_db()

        async with engine.connect() as conn:
            result = await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table'")
            )
            tables = {row[0] for row in result}

        assert {
            "users",
            "providers",
            "mcp_servers",
            "prompts",
            "skills_repos",
            "skills",
            "prompt_optimize_history",
        } <= tables
        await database.close_db()

    async def test_savepoint_rolls_back_one_row(self, tmp_path: Path) -> None:
        """A failed nested transaction keeps earlier rows of the outer one."""
        database.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'sp.db'}")
        await database.init_db()

        async with database.AsyncSessionLocal() as session:
            await session.execute(text("INSERT INTO users (name, api_key_hash) VALUES ('a', 'h1')"))
            with pytest.raises(IntegrityError):
                async with session.begin_nested():
                    await session.execute(
                        text("INSERT INTO users (name, api_key_hash) VALUES ('a', 'h2')")
                    )
            await session.commit()

            result = await session.execute(text("SELECT COUNT(*) FROM users"))
            assert result.scalar_one() == 1
        await database.close_db()
