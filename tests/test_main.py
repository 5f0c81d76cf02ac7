"""
Tests for the main FastAPI application endpoints.
"""
from app.core.config import settings


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, client):
        """Test the root endpoint returns expected message."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Selection Analysis Microservice running"}

    def test_health_endpoint(self, client):
        """Test the health endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "selection-analysis-microservice"
        assert data["version"] == settings.ANALYSIS_VERSION

    def test_health_reports_missing_secret(self, client, monkeypatch):
        """Test the health endpoint degrades when the internal secret is missing."""
        monkeypatch.delenv("INTERNAL_API_SECRET")
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["missing_config"] == ["INTERNAL_API_SECRET"]


class TestInternalAuth:
    """Tests for the internal secret dependency."""

    def test_missing_secret_header_is_forbidden(self, anonymous_client, sample_analysis_request):
        response = anonymous_client.post("/analyze-selections", json=sample_analysis_request)
        assert response.status_code == 403

    def test_wrong_secret_header_is_forbidden(self, anonymous_client):
        response = anonymous_client.get(
            "/selection-config", headers={"X-Internal-Secret": "not-the-secret"}
        )
        assert response.status_code == 403

    def test_unconfigured_secret_blocks_requests(self, client, monkeypatch):
        """Test that every protected route answers 503 when no secret is configured."""
        monkeypatch.setattr(settings, "INTERNAL_API_SECRET", "")
        response = client.get("/selection-config")
        assert response.status_code == 503
