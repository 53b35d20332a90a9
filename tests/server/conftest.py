"""Fixtures for API tests."""

from collections.abc import Iterator
from pathlib import Path

import anyio
import pytest
from fastapi.testclient import TestClient

from ccswitch.data import database
from ccswitch.server.app import create_app
from ccswitch.server.auth import create_user


async def _seed_user(name: str) -> str:
    await database.init_db()
    async with database.AsyncSessionLocal() as session:
        _, key = await create_user(session, name)
    return key


@pytest.fixture
def client_with_key(tmp_path: Path) -> Iterator[tuple[TestClient, str]]:
    """Create a TestClient with a temporary database and a user's API key."""
    database.configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    api_key = anyio.run(_seed_user, "alice")

    app = create_app()
    with TestClient(app) as client:
        yield client, api_key


@pytest.fixture
def second_key(client_with_key: tuple[TestClient, str]) -> str:
    """API key of another user sharing the same database."""
    return anyio.run(_seed_user, "bob")
