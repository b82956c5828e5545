"""Tests for CORS, security headers, and request logging middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from loguru import logger
from starlette.requests import Request

from tests.conftest import make_settings
from trade_school_api.api.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    get_client_ip,
    setup_cors,
)


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    return app


def _request(headers: dict[str, str], client: tuple[str, int] | None = ("10.0.0.1", 1234)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }
    return Request(scope)


class TestSecurityHeadersMiddleware:
    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_headers_present(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestRequestLoggingMiddleware:
    def test_logs_method_path_and_status(self) -> None:
        app = _create_test_app()
        app.add_middleware(RequestLoggingMiddleware)
        messages: list[str] = []
        sink_id = logger.add(lambda message: messages.append(str(message)), level="INFO")
        try:
            response = TestClient(app).get("/test")
        finally:
            logger.remove(sink_id)
        assert response.status_code == 200
        assert any("GET /test -> 200" in m for m in messages)


class TestCors:
    def test_configured_origin_allowed(self) -> None:
        app = _create_test_app()
        setup_cors(app, make_settings(cors_origins="https://schools.example.org"))
        response = TestClient(app).get("/test", headers={"Origin": "https://schools.example.org"})
        assert response.headers["access-control-allow-origin"] == "https://schools.example.org"

    def test_other_origin_not_allowed(self) -> None:
        app = _create_test_app()
        setup_cors(app, make_settings(cors_origins="https://schools.example.org"))
        response = TestClient(app).get("/test", headers={"Origin": "https://evil.example.com"})
        assert "access-control-allow-origin" not in response.headers

    def test_origin_regex(self) -> None:
        app = _create_test_app()
        setup_cors(app, make_settings(cors_origin_regex=r"https://.*\.example\.org"))
        response = TestClient(app).get("/test", headers={"Origin": "https://admin.example.org"})
        assert response.headers["access-control-allow-origin"] == "https://admin.example.org"


class TestGetClientIp:
    def test_forwarded_for_uses_leftmost(self) -> None:
        assert get_client_ip(_request({"X-Forwarded-For": "1.2.3.4, 10.0.0.2"})) == "1.2.3.4"

    def test_real_ip(self) -> None:
        assert get_client_ip(_request({"X-Real-IP": "5.6.7.8"})) == "5.6.7.8"

    def test_falls_back_to_peer(self) -> None:
        assert get_client_ip(_request({})) == "10.0.0.1"

    def test_unknown(self) -> None:
        assert get_client_ip(_request({}, client=None)) == "unknown"
