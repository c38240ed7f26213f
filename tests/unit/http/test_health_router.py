"""HTTP tests for the health endpoints."""

from unittest.mock import patch

from fastapi import status

from src.bookstore.core.services import DocumentStoreService


def test_liveness(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy", "service": "bookstore"}


def test_readiness_with_reachable_store(client):
    response = client.get("/health/ready")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "ready"
    assert body["checks"]["database"]["status"] == "healthy"
    assert body["checks"]["database"]["database"] == "bookstore_test"


def test_readiness_with_unreachable_store(client):
    with patch.object(DocumentStoreService, "health_check", return_value=False):
        response = client.get("/health/ready")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    body = response.json()
    assert body["status"] == "not_ready"
    assert body["checks"]["database"]["status"] == "unhealthy"
