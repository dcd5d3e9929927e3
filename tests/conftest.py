"""
Produtos API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── database:        real Database over in-memory SQLite, tables created
    ├── empty_database:  same, without tables (storage failure paths)
    ├── test_client:     HTTPX AsyncClient talking to create_app(database)
    └── sample_produto:  a product row as the service sees it
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any produtos_api imports
# Why: the module-level app must not try to reach a real PostgreSQL
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from produtos_api.database import Database
from produtos_api.main import create_app


def make_memory_database() -> Database:
    """
    In-memory SQLite handle. StaticPool keeps one connection alive so every
    session sees the same database.
    """
    return Database.from_url(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
        result = await service.get_produto(mock_db_session, "1")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with the produtos table created."""
    db = make_memory_database()
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def empty_database():
    """In-memory database without tables: every statement fails in the driver."""
    db = make_memory_database()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the app (no server process).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/produtos")
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_produto():
    """A stored row shaped like the ORM object the service reads attributes from."""
    return SimpleNamespace(id=1, nome="Caneca", preco=19.9, categoria="Geral")
