# =============================================================================
# tests/test_gateway.py - Gateway Pipeline Tests
# =============================================================================
# Tests the HTTP pipeline end to end through TestClient:
# - Stage ordering (PipelineOrderError)
# - Diagnostics: GET /, GET /health, GET /api/auth/test
# - CORS for the configured origin only
# - 404 fallback and 500 error handler
#
# Run with: pytest tests/test_gateway.py -v
# =============================================================================

from datetime import datetime

import pytest
from fastapi import APIRouter, FastAPI

from app.config import Settings
from app.gateway import CORS_HEADERS, CORS_METHODS, Gateway, PipelineOrderError, Stage
from app.middleware import BodySizeLimitMiddleware, RequestLoggingMiddleware, UnhandledErrorMiddleware


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def failing_router() -> APIRouter:
    router = APIRouter()

    @router.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    return router


# =============================================================================
# Pipeline Ordering
# =============================================================================

class TestPipelineOrder:
    """Tests for Gateway stage ordering."""

    @pytest.fixture
    def gateway(self, settings, database) -> Gateway:
        return Gateway(FastAPI(), settings, database)

    def test_mount_after_fallback_rejected(self, gateway):
        gateway.configure()
        gateway.register_diagnostics()
        gateway.register_fallback()

        with pytest.raises(PipelineOrderError) as exc_info:
            gateway.mount("/api/topics", APIRouter())

        assert exc_info.value.requested == Stage.MOUNTED
        assert exc_info.value.current == Stage.FALLBACK

    def test_configure_twice_rejected(self, gateway):
        gateway.configure()

        with pytest.raises(PipelineOrderError):
            gateway.configure()

    def test_diagnostics_after_error_handler_rejected(self, gateway):
        gateway.build()

        with pytest.raises(PipelineOrderError):
            gateway.register_diagnostics()

    def test_mount_is_repeatable(self, gateway):
        gateway.configure()
        gateway.mount("/api/topics", APIRouter())
        gateway.mount("/api/questions", APIRouter())

        assert gateway.stage == Stage.MOUNTED
        assert gateway.app.state.route_names == ["topics", "questions"]

    def test_duplicate_prefix_rejected(self, gateway):
        gateway.configure()
        gateway.mount("/api/topics", APIRouter())

        with pytest.raises(ValueError, match="already mounted"):
            gateway.mount("/api/topics", APIRouter())

    @pytest.mark.parametrize("prefix", ["api/topics", "/api/topics/", ""])
    def test_invalid_prefix_rejected(self, gateway, prefix):
        gateway.configure()

        with pytest.raises(ValueError, match="Invalid route prefix"):
            gateway.mount(prefix, APIRouter())

    def test_build_registers_missing_stages(self, gateway):
        app = gateway.build()

        assert gateway.stage == Stage.ERROR_HANDLER
        assert app.state.settings is gateway.settings
        assert app.state.database is gateway.database

    def test_middleware_order(self, gateway):
        """CORS is outermost, then the body limit, then the logger."""
        gateway.configure()

        classes = [m.cls for m in gateway.app.user_middleware]

        assert classes[1:] == [BodySizeLimitMiddleware, RequestLoggingMiddleware]
        assert classes[0].__name__ == "CORSMiddleware"

    def test_error_handler_runs_inside_cors(self, gateway):
        gateway.build()

        classes = [m.cls for m in gateway.app.user_middleware]

        assert classes[-1] is UnhandledErrorMiddleware
        assert classes[0].__name__ == "CORSMiddleware"


# =============================================================================
# Diagnostics
# =============================================================================

class TestRoot:
    """Tests for GET /."""

    def test_root_reports_connected(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "CodeBuddy API is running..."
        assert data["database"] == "connected"
        assert data["environment"] == "development"
        parse_timestamp(data["timestamp"])

    def test_root_reports_disconnected(self, make_client, database):
        database.state = "disconnected"

        response = make_client().get("/")

        assert response.status_code == 200
        assert response.json()["database"] == "disconnected"


class TestHealth:
    """Tests for GET /health."""

    def test_health_lists_route_collections(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        assert data["database"] == "connected"
        assert data["routes"] == [
            "auth", "users", "topics", "questions", "progress", "badges", "voice-interview",
        ]

    def test_health_is_ok_while_disconnected(self, make_client, database):
        database.state = "disconnected"

        response = make_client().get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "OK"
        assert response.json()["database"] == "disconnected"

    def test_health_timestamp_is_iso_utc(self, client):
        timestamp = client.get("/health").json()["timestamp"]

        assert timestamp.endswith("Z")
        assert parse_timestamp(timestamp).utcoffset().total_seconds() == 0

    def test_health_does_not_query_database(self, client, fake_supabase):
        client.get("/health")

        assert fake_supabase.executed == []


class TestAuthTest:
    """Tests for GET /api/auth/test."""

    def test_auth_test_route(self, client):
        response = client.get("/api/auth/test")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Auth test route is working!"
        parse_timestamp(data["timestamp"])

    def test_auth_test_needs_no_token(self, client):
        response = client.get("/api/auth/test", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200


# =============================================================================
# CORS
# =============================================================================

class TestCORS:
    """Tests for the single-origin CORS policy."""

    def test_preflight_from_allowed_origin(self, client):
        response = client.options(
            "/api/topics",
            headers={
                "Origin": "http://localhost:4200",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type, Authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:4200"
        assert response.headers["access-control-allow-credentials"] == "true"
        allowed_methods = response.headers["access-control-allow-methods"]
        for method in CORS_METHODS:
            assert method in allowed_methods
        allowed_headers = response.headers["access-control-allow-headers"].lower()
        for header in CORS_HEADERS:
            assert header.lower() in allowed_headers

    def test_simple_request_from_allowed_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:4200"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:4200"

    def test_other_origin_gets_no_allow_header(self, client):
        response = client.get("/health", headers={"Origin": "http://evil.example.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_preflight_from_other_origin_rejected(self, client):
        response = client.options(
            "/api/topics",
            headers={
                "Origin": "http://evil.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_configured_origin(self, make_client):
        custom = Settings(CORS_ORIGIN="https://app.codebuddy.dev", DAILY_QUESTIONS_ENABLED=False)

        response = make_client(settings_override=custom).get(
            "/health", headers={"Origin": "https://app.codebuddy.dev"}
        )

        assert response.headers["access-control-allow-origin"] == "https://app.codebuddy.dev"


# =============================================================================
# 404 Fallback
# =============================================================================

class TestRouteNotFound:
    """Tests for the catch-all 404."""

    def test_unknown_get(self, client):
        response = client.get("/api/nonexistent")

        assert response.status_code == 404
        assert response.json() == {
            "message": "Route not found",
            "path": "/api/nonexistent",
            "method": "GET",
        }

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
    def test_unknown_route_any_method(self, client, method):
        response = client.request(method, "/nowhere")

        assert response.status_code == 404
        assert response.json()["method"] == method

    def test_path_keeps_query_string(self, client):
        response = client.get("/api/nonexistent?page=2")

        assert response.json()["path"] == "/api/nonexistent?page=2"

    def test_nested_unknown_path(self, client):
        response = client.get("/api/topics/extra/segments/here")

        assert response.status_code == 404

    def test_trailing_slash_redirects_to_route(self, client):
        response = client.get("/api/topics/?limit=2", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"].endswith("/api/topics?limit=2")

    def test_trailing_slash_on_unknown_path(self, client):
        response = client.get("/api/nonexistent/", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["path"] == "/api/nonexistent/"


# =============================================================================
# 500 Error Handler
# =============================================================================

class TestServerError:
    """Tests for the catch-all 500."""

    def test_development_exposes_error(self, make_client, failing_router):
        client = make_client(route_collections=[("/api/test", failing_router)])

        response = client.get("/api/test/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error", "error": "kaboom"}

    def test_production_hides_error(self, make_client, production_settings, failing_router):
        client = make_client(
            settings_override=production_settings,
            route_collections=[("/api/test", failing_router)],
        )

        response = client.get("/api/test/boom")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}

    def test_server_keeps_serving_after_error(self, make_client, failing_router):
        client = make_client(route_collections=[("/api/test", failing_router)])

        client.get("/api/test/boom")
        response = client.get("/health")

        assert response.status_code == 200

    def test_error_carries_cors_headers(self, make_client, failing_router):
        client = make_client(route_collections=[("/api/test", failing_router)])

        response = client.get("/api/test/boom", headers={"Origin": "http://localhost:4200"})

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "http://localhost:4200"
        assert response.json()["message"] == "Internal server error"
