"""
tests/test_api.py - Flask routes, via the test client.
"""
import pytest

from ai_detector.api import create_app
from ai_detector.media_processor import MediaProcessor
from tests.conftest import CAT_URL, FakeResponse, FakeSession, StubLLMManager


@pytest.fixture
def client(pipeline):
    app = create_app(pipeline)
    app.config["TESTING"] = True
    return app.test_client()


class TestAnalyzeUrlRoute:

    def test_success(self, client):
        response = client.post("/api/analyze-url", json={"url": CAT_URL})

        assert response.status_code == 200
        body = response.get_json()
        assert body["description"] == "A photo of a cat."
        assert body["aiLikelihood"] == {"score": 0.9, "label": "Very Likely AI-generated"}
        assert body["reasons"] == ["sharp fur detail", "natural eye reflection"]
        assert "cached" not in body

    def test_second_request_is_cached(self, client, pipeline):
        client.post("/api/analyze-url", json={"url": CAT_URL})
        body = client.post("/api/analyze-url", json={"url": CAT_URL}).get_json()

        assert body["cached"] is True
        assert len(pipeline.llm_manager.calls) == 1

    @pytest.mark.parametrize("payload", [{}, {"url": ""}, {"link": CAT_URL}])
    def test_missing_url(self, client, payload):
        response = client.post("/api/analyze-url", json=payload)
        assert response.status_code == 400
        assert response.get_json() == {"error": "Image URL is required"}

    def test_non_json_body(self, client):
        response = client.post("/api/analyze-url", data="url=x", content_type="text/plain")
        assert response.status_code == 400

    @pytest.mark.parametrize("url", ["notaurl", "http://[::1/cat.png"])
    def test_malformed_url(self, client, url):
        response = client.post("/api/analyze-url", json={"url": url})
        assert response.status_code == 400
        assert "Invalid image URL" in response.get_json()["error"]

    def test_fetch_failure(self, client, pipeline):
        pipeline.media_processor = MediaProcessor(session=FakeSession(FakeResponse(status_code=500)))
        response = client.post("/api/analyze-url", json={"url": CAT_URL})

        assert response.status_code == 500
        assert response.get_json()["error"].startswith("Failed to fetch image")

    def test_analysis_failure(self, client, pipeline):
        pipeline.llm_manager = StubLLMManager({"error": "model unavailable"})
        response = client.post("/api/analyze-url", json={"url": CAT_URL})

        assert response.status_code == 500
        assert response.get_json() == {"error": "model unavailable"}

    def test_get_not_allowed(self, client):
        response = client.get("/api/analyze-url")
        assert response.status_code == 405
        assert response.get_json() == {"error": "Method not allowed"}

    def test_cors_header(self, client):
        response = client.post("/api/analyze-url", json={"url": CAT_URL},
                               headers={"Origin": "http://localhost:5173"})
        assert response.headers.get("Access-Control-Allow-Origin") in ("*", "http://localhost:5173")


class TestInfoRoutes:

    def test_health(self, client):
        client.post("/api/analyze-url", json={"url": CAT_URL})
        body = client.get("/health").get_json()

        assert body["status"] == "healthy"
        assert body["providers"] == ["openai"]
        assert body["cache_size"] == 1

    def test_providers(self, client):
        body = client.get("/providers").get_json()
        assert body == {"providers": ["openai"], "default_provider": "openai"}
