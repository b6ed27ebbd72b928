"""Tests for the portfolio CMS application wiring, health and file retrieval."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio_cms.api.main import app
from portfolio_cms.config import Settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"upload"


@pytest.fixture
def client(cms_env: Settings) -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_reports_database(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "connected"}


class TestAppConfiguration:
    """Tests for the FastAPI app configuration."""

    def test_app_title(self) -> None:
        assert app.title == "Portfolio CMS API"

    def test_cors_middleware_is_configured(self) -> None:
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in middleware_classes

    def test_unknown_route_returns_404(self, client: TestClient) -> None:
        assert client.get("/api/nonexistent").status_code == 404

    @pytest.mark.parametrize(
        "schema",
        [
            "BlogResponse",
            "BookResponse",
            "CertificateResponse",
            "ResumeResponse",
            "TodoResponse",
            "VideoResponse",
        ],
    )
    def test_response_schemas_are_documented(self, schema: str) -> None:
        schemas = app.openapi()["components"]["schemas"]
        assert schemas[schema].get("description")

    def test_video_create_documents_json_and_form(self) -> None:
        body = app.openapi()["paths"]["/api/videos"]["post"]["requestBody"]
        assert set(body["content"]) == {
            "application/json",
            "application/x-www-form-urlencoded",
        }


class TestUploads:
    """Tests for serving stored files."""

    def test_serves_stored_blog_image(self, client: TestClient) -> None:
        created = client.post(
            "/api/blogs",
            data={"title": "Post", "description": "Body"},
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
        ).json()

        response = client.get(f"/uploads/blogs/{created['image']}")

        assert response.status_code == 200
        assert response.content == PNG_BYTES
        assert response.headers["content-type"] == "image/png"

    def test_missing_file(self, client: TestClient) -> None:
        response = client.get("/uploads/blogs/nothing.png")

        assert response.status_code == 404
        assert response.json() == {"detail": "File not found."}

    def test_unknown_category(self, client: TestClient) -> None:
        assert client.get("/uploads/secrets/file.png").status_code == 404
