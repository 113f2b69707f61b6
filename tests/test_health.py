"""
Tests for health check and application lifecycle.
"""

from fastapi.testclient import TestClient

from bookingsync_oauth.main import app
from bookingsync_oauth.oauth.dependencies import get_transport


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health_endpoint(self):
        """Test the /health endpoint returns healthy status."""
        response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestApplicationLifecycle:
    """Test application lifecycle events."""

    def test_shutdown_closes_transport(self):
        """Test shutdown closes the shared HTTP transport."""
        with TestClient(app) as test_client:
            assert test_client.get("/health").status_code == 200
            transport = get_transport()

        assert transport._client.is_closed is True
        assert get_transport() is not transport
