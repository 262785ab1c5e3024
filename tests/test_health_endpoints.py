"""
Tests for health check endpoints and the Ollama readiness probe.

This module tests:
- /api/health endpoint (liveness probe)
- /api/health/ready endpoint (readiness probe)
- check_ollama() probe function
- / root endpoint

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from viral_or_vile.core.probes import check_ollama
from viral_or_vile.main import app


client = TestClient(app)


def mock_async_client(get):
    """Patch httpx.AsyncClient so .get() is the given AsyncMock."""
    mock_client = AsyncMock()
    mock_client.get = get
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return patch("httpx.AsyncClient", return_value=mock_client)


class TestHealthEndpoint:
    """Tests for /api/health liveness probe."""

    def test_health_returns_200(self):
        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        timestamp = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
        assert isinstance(timestamp, datetime)

    def test_root_lists_analyze_route(self):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["analyze"] == "/api/analyze"


class TestReadinessEndpoint:
    """Tests for /api/health/ready."""

    def test_ready_when_ollama_healthy(self):
        """
        Test readiness returns 200 when Ollama answers.

        Arrange: Mock check_ollama to succeed
        Act: GET /api/health/ready
        Assert: 200, status ready, ollama check healthy
        """
        # Arrange
        with patch("viral_or_vile.api.v1.health.check_ollama", AsyncMock(return_value=True)):
            # Act
            response = client.get("/api/health/ready")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["ollama"]["healthy"] is True
        assert data["checks"]["ollama"]["error"] is None

    def test_not_ready_when_ollama_down(self):
        # Arrange
        with patch("viral_or_vile.api.v1.health.check_ollama", AsyncMock(return_value=False)):
            # Act
            response = client.get("/api/health/ready")

        # Assert
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["ollama"]["healthy"] is False
        assert "unreachable" in data["checks"]["ollama"]["error"]


class TestOllamaProbe:
    """Tests for check_ollama()."""

    @pytest.mark.anyio
    async def test_success(self):
        # Arrange
        mock_response = MagicMock()
        mock_response.status_code = 200
        get = AsyncMock(return_value=mock_response)

        with mock_async_client(get):
            # Act
            result = await check_ollama()

        # Assert
        assert result is True
        get.assert_awaited_once_with("http://ollama.test:11434/api/tags")

    @pytest.mark.anyio
    async def test_server_error_status(self):
        mock_response = MagicMock()
        mock_response.status_code = 500

        with mock_async_client(AsyncMock(return_value=mock_response)):
            result = await check_ollama()

        assert result is False

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("Connection refused"),
            httpx.ReadTimeout("timed out"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_errors_report_unhealthy(self, error):
        with mock_async_client(AsyncMock(side_effect=error)):
            result = await check_ollama()

        assert result is False
