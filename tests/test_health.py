"""
Unit tests for /health and the root endpoint.

Tests API health monitoring including:
- Service availability
- Response format
"""


class TestHealthRoutes:
    """Tests for /health endpoint."""

    def test_health_check(self, client):
        """GET /health returns 200 and status."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_does_not_touch_remote_services(self, client, backend, identity):
        response = client.get("/health")

        assert response.status_code == 200
        assert identity.lookup_calls == []
        assert backend.save_count == 0


class TestRoot:

    def test_root_reports_version(self, client):
        from account_relay.main import VERSION

        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Account Relay API", "version": VERSION}
