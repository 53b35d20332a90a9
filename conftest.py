"""Pytest configuration and fixtures.

This module provides shared fixtures and configuration for the test suite.
It enables async test support and provides a throwaway database per test.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent
SRC_PATH = PROJECT_ROOT / "src"


if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from ccswitch.data import database  # noqa: E402
from ccswitch.data.models.user import User  # noqa: E402
from ccswitch.server.auth import create_user  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


@pytest.fixture
async def session(tmp_path: Path) -> AsyncIterator[AsyncSession]:
    """Session bound to a fresh SQLite file with every table created."""
    engine = database.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await database.init_db()
    async with database.AsyncSessionLocal() as db_session:
        yield db_session
    await engine.dispose()


@pytest.fixture
async def user(session: AsyncSession) -> User:
    """A user owning the records created in a test."""
    created, _ = await create_user(session, "alice")
    return created
