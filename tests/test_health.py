"""
Tests for health check and fallback endpoints.
"""
from fastapi.testclient import TestClient


class TestHealth:
    """Tests for health check endpoints."""

    def test_basic_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_api_health_with_database(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["services"]["database"]["status"] == "ok"


class TestRoot:

    def test_welcome(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "welcome to JWT Pizza"

    def test_unknown_endpoint(self, client: TestClient):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"message": "unknown endpoint"}
