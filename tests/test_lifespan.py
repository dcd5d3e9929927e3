"""
Produtos API — Startup / Shutdown Tests
========================================

What:  Enters the app's lifespan context directly; httpx's ASGITransport
       does not send lifespan events.

What we test:
    ✅ Startup configures logging and logs the listening address
    ✅ Shutdown disposes the database handle
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from produtos_api import main
from produtos_api.config import settings
from produtos_api.database import Database


@pytest.fixture
def app_with_mock_database(monkeypatch):
    # basicConfig(force=True) would remove pytest's capture handler
    setup_logging = MagicMock()
    monkeypatch.setattr(main, "setup_logging", setup_logging)

    database = MagicMock(spec=Database)
    database.dispose = AsyncMock()
    app = main.create_app(database=database)
    return app, database, setup_logging


@pytest.mark.asyncio
async def test_startup_logs_banner(app_with_mock_database, caplog):
    app, database, setup_logging = app_with_mock_database
    caplog.set_level(logging.INFO, logger="produtos_api.main")

    async with main.lifespan(app):
        messages = [r.getMessage() for r in caplog.records]
        setup_logging.assert_called_once_with()
        database.dispose.assert_not_awaited()

    assert f"🚀 Servidor rodando na porta {settings.port}" in messages
    assert f"📡 Health check: http://localhost:{settings.port}/health" in messages
    assert f"📦 Produtos: http://localhost:{settings.port}/produtos" in messages


@pytest.mark.asyncio
async def test_shutdown_disposes_database(app_with_mock_database):
    app, database, _ = app_with_mock_database

    async with main.lifespan(app):
        pass

    database.dispose.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_shutdown_disposes_real_engine(database, monkeypatch):
    monkeypatch.setattr(main, "setup_logging", MagicMock())
    app = main.create_app(database=database)
    dispose = AsyncMock(wraps=database.dispose)
    monkeypatch.setattr(database, "dispose", dispose)

    async with main.lifespan(app):
        assert await database.now() is not None

    dispose.assert_awaited_once()
