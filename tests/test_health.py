"""
Produtos API — Banner and Health Check Tests
=============================================

What we test:
    ✅ GET / answers without touching the database
    ✅ GET /health reports healthy with the database timestamp
    ✅ GET /health reports unhealthy, 500, with the raw error when the database is down
"""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from produtos_api.database import Database
from produtos_api.main import create_app
from produtos_api.routes.health import utc_timestamp


def _broken_database(error: Exception) -> MagicMock:
    database = MagicMock(spec=Database)
    database.now = AsyncMock(side_effect=error)
    return database


async def _get(app, path):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


class TestRoot:

    @pytest.mark.asyncio
    async def test_banner(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert "funcionando" in body["message"]
        assert body["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_banner_does_not_need_the_database(self):
        database = _broken_database(ConnectionRefusedError("connection refused"))

        response = await _get(create_app(database=database), "/")

        assert response.status_code == 200
        database.now.assert_not_awaited()

    def test_utc_timestamp_format(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["api"] == "✅ Online"
        assert body["database"] == "✅ Conectado"
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_unhealthy_exposes_error(self):
        database = _broken_database(ConnectionRefusedError("connection refused"))

        response = await _get(create_app(database=database), "/health")

        assert response.status_code == 500
        assert response.json() == {
            "status": "unhealthy",
            "api": "⚠️  Online",
            "database": "❌ Desconectado",
            "error": "connection refused",
        }

    @pytest.mark.asyncio
    async def test_unhealthy_with_real_unreachable_engine(self):
        # A file path inside a missing directory cannot be opened by SQLite
        database = Database.from_url("sqlite+aiosqlite:////nonexistent-dir/produtos.db")
        try:
            response = await _get(create_app(database=database), "/health")
        finally:
            await database.dispose()

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["error"]
