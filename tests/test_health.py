# ==============================================================================
# HEALTH CHECK TESTS
# ==============================================================================

import pytest
from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health and status endpoints."""

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "AR Surgical Hub API is running"
        assert data["env"] == "development"

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "message": "AR Surgical Hub API is running",
            "database": "connected",
        }

    @pytest.mark.asyncio
    async def test_health_without_database(self, client: AsyncClient):
        from app.main import app

        app.state.db = None
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["database"] == "disconnected"

    @pytest.mark.asyncio
    async def test_routes_without_database_are_unavailable(self, client: AsyncClient):
        from app.main import app

        app.state.db = None
        response = await client.get("/api/categories")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_request_headers(self, client: AsyncClient):
        response = await client.get("/api/health", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/does-not-exist")
        assert response.status_code == 404
