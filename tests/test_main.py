"""Unit tests for the main FastAPI application."""
from unittest.mock import patch

from fastapi.testclient import TestClient

from reading_tracker.main import app
from reading_tracker.storage import InMemoryKeyValueStore
from reading_tracker.utils.exceptions import StorageError


class TestHealthCheck:
    """Test cases for health check endpoint."""

    def test_health_check_success(self):
        """Test successful health check."""
        with TestClient(app) as client:
            response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert data["version"] == "1.0.0"


class TestStartup:

    def test_startup_loads_bundled_plans(self):
        with TestClient(app) as client:
            response = client.get("/api/plans")

        assert response.status_code == 200
        assert [plan["id"] for plan in response.json()] == ["gospel-of-john", "psalms-of-comfort"]

    @patch("reading_tracker.main.create_store")
    def test_unavailable_backend_falls_back_to_memory(self, mock_create_store):
        mock_create_store.side_effect = StorageError("PostgreSQL connection pool unavailable")

        with TestClient(app) as client:
            assert isinstance(app.state.store, InMemoryKeyValueStore)
            assert client.get("/").status_code == 200

    def test_cors_headers(self):
        with TestClient(app) as client:
            response = client.options(
                "/api/plans",
                headers={
                    "Origin": "http://localhost:5173",
                    "Access-Control-Request-Method": "GET",
                },
            )

        assert response.headers.get("access-control-allow-origin") == "http://localhost:5173"
