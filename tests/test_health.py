"""
Health endpoint tests
"""

import datetime

import pytest
from sqlalchemy.exc import OperationalError


class TestHealthEndpoints:
    """Test health check endpoints"""

    @pytest.mark.asyncio
    async def test_health_check_success(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert isinstance(data["uptime"], (int, float))
        datetime.datetime.fromisoformat(data["timestamp"].replace('Z', '+00:00'))

    @pytest.mark.asyncio
    async def test_detailed_health_reports_database(self, client):
        response = await client.get("/api/v1/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"] == {"reachable": True}
        assert data["components"]["realtime"]["subscribers"]["events"] == 0

    @pytest.mark.asyncio
    async def test_readiness_fails_when_database_is_down(self, client, store, monkeypatch):
        async def broken_ping():
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        monkeypatch.setattr(store, "ping", broken_ping)

        response = await client.get("/api/v1/health/ready")
        assert response.status_code == 503
        assert response.json()["success"] is False

        response = await client.get("/api/v1/health/detailed")
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_readiness_and_liveness(self, client):
        response = await client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

        response = await client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"
        assert isinstance(response.json()["pid"], int)

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/health"
