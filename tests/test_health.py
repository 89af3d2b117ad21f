"""Tests for the liveness and service information endpoints."""

from fastapi import status
from fastapi.testclient import TestClient


class TestHealthCheck:
    """Test suite for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test the liveness probe answers without touching the store."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"ok": True}

    def test_health_check_ignores_store_failure(self, client: TestClient, experiment_repository):
        experiment_repository.fail_with = ConnectionError("store down")

        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert experiment_repository.queries == []

    def test_root_endpoint(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Experiment Session API"
        assert data["environment"] == "test"
        assert data["api_prefix"] == "/api"

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/nowhere")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["success"] is False
