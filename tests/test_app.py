# =============================================================================
# tests/test_app.py - Application Wiring Tests
# =============================================================================
# Tests for create_app(): health check, root endpoint, unknown routes and
# the error envelope for unexpected failures.
#
# Run with: pytest tests/test_app.py -v
# =============================================================================

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "Server is healthy", "db": "connected"}

    def test_health_database_down(self, client, application, monkeypatch):
        async def failing_ping():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr(application.state.database, "ping", failing_ping)

        response = client.get("/health")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Database request failed"}
        }


class TestRouting:
    """Tests for the root endpoint and unmatched routes."""

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "Portfolio API"
        assert body["health"] == "/health"

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Route not found"}}

    def test_wrong_method(self, client):
        response = client.put("/api/projects")

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Route not found"

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/projects",
            headers={"Origin": "https://portfolio.dev", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestUnexpectedErrors:
    """Unexpected exceptions are rendered through the same envelope."""

    def test_internal_error_details_outside_production(self, application):
        async def boom():
            raise RuntimeError("boom")

        application.add_api_route("/boom", boom)

        with TestClient(application, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error", "details": "boom"}
        }

    def test_internal_error_hidden_in_production(self, settings, fake_storage):
        from app.main import create_app

        application = create_app(settings.model_copy(update={"ENVIRONMENT": "production"}))

        async def boom():
            raise RuntimeError("secret detail")

        application.add_api_route("/boom", boom)

        with TestClient(application, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert "details" not in response.json()["error"]
