"""
Integration Tests for Health Endpoints.
"""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient


class TestLiveness:

    async def test_health_returns_healthy(self, client_no_db: AsyncClient):
        """Should report healthy on the liveness endpoint."""
        response = await client_no_db.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_health_needs_no_token(self, client_no_db: AsyncClient):
        """Should answer liveness without a bearer token."""
        response = await client_no_db.get("/health")

        assert response.status_code == 200
        assert "X-Request-ID" in response.headers


class TestReadiness:

    async def test_ready_when_database_healthy(self, client_no_db: AsyncClient):
        """Should report ready when the database answers."""
        with patch(
            "modules.backend.api.health.check_database",
            new=AsyncMock(return_value={"status": "healthy", "latency_ms": 1}),
        ):
            response = await client_no_db.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"]["status"] == "healthy"

    async def test_not_ready_when_database_unhealthy(self, client_no_db: AsyncClient):
        """Should return 503 with the failing check when the database is down."""
        with patch(
            "modules.backend.api.health.check_database",
            new=AsyncMock(return_value={"status": "unhealthy", "error": "OperationalError"}),
        ):
            response = await client_no_db.get("/health/ready")

        assert response.status_code == 503
