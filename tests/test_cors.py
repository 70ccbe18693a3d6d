#!/usr/bin/env python3
"""
Pytest tests for CORS configuration
Tests that the FastAPI application properly handles CORS requests from the quiz frontend
"""

import pytest

from aptiquest.core.config import settings

FRONTEND_ORIGIN = "http://localhost:5174"


class TestCORSConfiguration:
    """Test CORS middleware configuration"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        """Set up test fixtures"""
        self.client = client
        self.frontend_origin = FRONTEND_ORIGIN

    def test_frontend_origin_is_configured(self):
        assert self.frontend_origin in settings.CORS_ORIGINS

    def test_cors_preflight_request(self):
        """Test CORS preflight OPTIONS request"""
        response = self.client.options(
            "/",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert "access-control-allow-methods" in response.headers
        assert "access-control-allow-headers" in response.headers

    def test_cors_simple_get_request(self):
        """Test simple GET request with CORS headers"""
        response = self.client.get("/", headers={"Origin": self.frontend_origin})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.json() == {"message": "AptiQuest backend is running"}

    def test_cors_preflight_post_request(self):
        """Test CORS preflight for creating a quiz with a bearer token"""
        response = self.client.options(
            "/quizzes",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type,Authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == self.frontend_origin
        assert "POST" in response.headers["access-control-allow-methods"].upper()

    def test_cors_allowed_methods(self):
        """Test the preflight for every method the API uses"""
        for method in ["GET", "POST", "PUT", "DELETE"]:
            response = self.client.options(
                "/questions",
                headers={
                    "Origin": self.frontend_origin,
                    "Access-Control-Request-Method": method,
                },
            )

            assert response.status_code == 200
            assert method in response.headers["access-control-allow-methods"].upper()

    def test_cors_rejects_unlisted_method(self):
        response = self.client.options(
            "/",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "PATCH",
            },
        )
        assert response.status_code == 400

    def test_cors_rejects_custom_headers(self):
        """Only Content-Type and Authorization may be sent"""
        response = self.client.options(
            "/",
            headers={
                "Origin": self.frontend_origin,
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Authorization,X-Custom-Header",
            },
        )
        assert response.status_code == 400

    def test_cors_without_origin_header(self):
        """Test request without Origin header (non-CORS request)"""
        response = self.client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCORSSecurityScenarios:
    """Test CORS security scenarios"""

    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client

    def test_127_0_0_1_origin_not_explicitly_allowed(self):
        """Test that 127.0.0.1 is different from localhost"""
        response = self.client.get("/", headers={"Origin": "http://127.0.0.1:5174"})

        assert response.status_code == 200
        assert (
            response.headers.get("access-control-allow-origin")
            != "http://127.0.0.1:5174"
        )

    def test_random_origin_not_allowed(self):
        """Test that random origins are not allowed"""
        response = self.client.get("/", headers={"Origin": "http://evil-site.com"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
