"""
Tests for middleware components.

This module tests:
- RequestIDMiddleware (correlation ID tracking)
- LoggingMiddleware (request/response logging)

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import uuid
from unittest.mock import patch

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from viral_or_vile.middleware.logging import LoggingMiddleware
from viral_or_vile.middleware.request_id import RequestIDMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request):
        return {"request_id": request.state.request_id}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("model exploded")

    return app


class TestRequestIDMiddleware:
    """Tests for request ID correlation middleware."""

    def test_request_id_generated_when_missing(self):
        """
        Test that a UUID is generated when no header is sent.

        Arrange: App with RequestIDMiddleware
        Act: Request without X-Request-ID
        Assert: Response header is a UUID matching request.state
        """
        # Arrange
        client = TestClient(build_app())

        # Act
        response = client.get("/echo")

        # Assert
        request_id = response.headers["X-Request-ID"]
        uuid.UUID(request_id)
        assert response.json()["request_id"] == request_id

    def test_request_id_preserved_from_header(self):
        client = TestClient(build_app())

        response = client.get("/echo", headers={"X-Request-ID": "upload-123"})

        assert response.headers["X-Request-ID"] == "upload-123"
        assert response.json()["request_id"] == "upload-123"

    def test_overlong_request_id_replaced(self):
        client = TestClient(build_app())

        response = client.get("/echo", headers={"X-Request-ID": "x" * 500})

        assert response.headers["X-Request-ID"] != "x" * 500
        uuid.UUID(response.headers["X-Request-ID"])


class TestLoggingMiddleware:
    """Tests for request/response logging."""

    def test_logs_start_and_completion(self):
        """
        Test both lifecycle events are logged with request context.

        Arrange: Patch the middleware logger
        Act: GET /echo
        Assert: "Request started" and "Request completed" with status and latency
        """
        # Arrange
        client = TestClient(build_app())

        with patch("viral_or_vile.middleware.logging.logger") as mock_logger:
            # Act
            response = client.get("/echo", headers={"X-Request-ID": "log-1"})

        # Assert
        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert messages == ["Request started", "Request completed"]
        completed = mock_logger.info.call_args_list[1].kwargs["extra"]
        assert completed["status_code"] == response.status_code == 200
        assert completed["request_id"] == "log-1"
        assert completed["path"] == "/echo"
        assert completed["latency_ms"] >= 0

    def test_logs_and_reraises_failures(self):
        # Arrange
        client = TestClient(build_app(), raise_server_exceptions=True)

        with patch("viral_or_vile.middleware.logging.logger") as mock_logger:
            # Act
            with pytest.raises(RuntimeError):
                client.get("/boom")

        # Assert
        mock_logger.error.assert_called_once()
        extra = mock_logger.error.call_args.kwargs["extra"]
        assert extra["exception_type"] == "RuntimeError"
        assert extra["path"] == "/boom"
