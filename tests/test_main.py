import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from app.main import app
    return TestClient(app)


class TestApplication:
    """Test cases for the assembled application"""

    def test_root(self, client):
        """Test the root endpoint reports ok"""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_health(self, client):
        """Test both health paths report healthy"""
        for path in ("/health", "/api/health"):
            response = client.get(path)
            assert response.status_code == 200
            assert response.json()["status"] == "healthy"

    def test_ai_router_mounted_under_api(self, client):
        """Test the AI routes are mounted under /api with tracing headers"""
        response = client.get("/api/ai/supported-formats")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        assert "X-Processing-Time" in response.headers

    def test_validation_error_envelope(self, client):
        """Test validation errors use the error envelope with the request id"""
        response = client.post("/api/ai/generate-cover-letter", json={})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Missing required fields: jobTitle, jobDescription, companyName"
        assert body["request_id"] == response.headers["X-Request-ID"]

    def test_malformed_json_is_422(self, client):
        """Test an unparseable JSON body is a 422 envelope"""
        response = client.post(
            "/api/ai/generate-cover-letter",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["success"] is False
