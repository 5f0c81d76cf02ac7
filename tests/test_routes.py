"""
Tests for the selection analysis HTTP routes.
"""
from app.main import app
from app.services.feature_flags import SELECTION_ANALYSIS_FLAG


FACTOR_NAMES = {"goalAlignment", "intensityMatch", "durationFit", "recoveryRespect", "equipmentOptimization"}


class TestAnalyzeSelectionsEndpoint:
    """Tests for POST /analyze-selections."""

    def test_requires_body(self, client):
        response = client.post("/analyze-selections")
        assert response.status_code == 422

    def test_valid_request(self, client, sample_analysis_request):
        response = client.post("/analyze-selections", json=sample_analysis_request)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        analysis = data["analysis"]
        assert set(analysis["factors"]) == FACTOR_NAMES
        assert 0 <= analysis["overallScore"] <= 1
        assert analysis["metadata"]["version"] == "1.0.0"
        assert analysis["educationalContent"][0]["id"] == "selection-basics"

    def test_enhanced_selection_shapes(self, client, sample_analysis_request):
        sample_analysis_request["selections"] = {
            "focus": {"focus": "cardio", "label": "Cardio"},
            "duration": {"duration": 30},
            "energy": {"rating": 8, "categories": ["rested"]},
            "equipment": {"specificEquipment": ["bike"]},
        }
        response = client.post("/analyze-selections", json=sample_analysis_request)
        assert response.status_code == 200
        assert response.json()["status"] == "success"

    def test_missing_profile_is_unavailable(self, client, sample_analysis_request):
        del sample_analysis_request["profile"]
        response = client.post("/analyze-selections", json=sample_analysis_request)
        assert response.status_code == 200
        assert response.json() == {"status": "unavailable", "analysis": None}

    def test_missing_selections_is_unavailable(self, client, sample_analysis_request):
        del sample_analysis_request["selections"]
        response = client.post("/analyze-selections", json=sample_analysis_request)
        assert response.json() == {"status": "unavailable", "analysis": None}

    def test_out_of_range_rating_is_rejected(self, client, sample_analysis_request):
        sample_analysis_request["selections"]["energy"] = 9
        response = client.post("/analyze-selections", json=sample_analysis_request)
        assert response.status_code == 422

    def test_disabled_flag_is_unavailable(self, client, sample_analysis_request):
        flags = app.state.selection_service.flags
        original = flags.get_flag(SELECTION_ANALYSIS_FLAG)
        flags.disable(SELECTION_ANALYSIS_FLAG)
        try:
            response = client.post("/analyze-selections", json=sample_analysis_request)
        finally:
            flags.set_flag(
                SELECTION_ANALYSIS_FLAG,
                enabled=original.enabled,
                rolloutPercentage=original.rolloutPercentage,
            )
        assert response.json()["status"] == "unavailable"


class TestQuickAnalysisEndpoint:
    """Tests for POST /quick-analysis."""

    def test_valid_request(self, client, sample_analysis_request):
        response = client.post("/quick-analysis", json=sample_analysis_request)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        summary = data["summary"]
        assert summary["status"] in {"excellent", "good", "warning", "poor"}
        assert 0 <= summary["score"] <= 1
        assert summary["message"]

    def test_missing_profile_is_unavailable(self, client, sample_analysis_request):
        del sample_analysis_request["profile"]
        response = client.post("/quick-analysis", json=sample_analysis_request)
        assert response.json() == {"status": "unavailable", "summary": None}


class TestConfigEndpoints:
    """Tests for the config and cache management endpoints."""

    def test_get_config(self, client):
        response = client.get("/selection-config")
        assert response.status_code == 200
        data = response.json()
        assert data["weights"]["goalAlignment"] == 0.25
        assert data["enableCaching"] is True

    def test_patch_config_merges(self, client):
        response = client.patch("/selection-config", json={"cacheTimeout": 60})
        assert response.status_code == 200
        data = response.json()
        assert data["cacheTimeout"] == 60
        assert data["enableCaching"] is True

        assert client.get("/selection-config").json()["cacheTimeout"] == 60

    def test_patch_config_rejects_bad_values(self, client):
        response = client.patch("/selection-config", json={"cacheTimeout": -5})
        assert response.status_code == 422

    def test_clear_cache(self, client, sample_analysis_request):
        client.post("/analyze-selections", json=sample_analysis_request)
        response = client.delete("/selection-cache")
        assert response.status_code == 200
        assert response.json() == {"status": "success"}
        assert len(app.state.selection_service.analyzer.cache) == 0
