"""Tests for the HTML shells and response hardening."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from app.core.constants import SECURITY_HEADERS
from conftest import Harness

RECRUITER_KEY = "s3cret-dashboard-key"


class TestRecruiterDashboard:
    def test_correct_key_serves_dashboard(self, make_app: Callable[..., Harness]) -> None:
        harness = make_app(RECRUITER_KEY=RECRUITER_KEY)

        response = harness.client.get(f"/r/{RECRUITER_KEY}")

        assert response.status_code == 200
        assert "Recruiter Dashboard" in response.text
        assert "noindex" in response.text
        assert response.headers["x-robots-tag"] == "noindex, nofollow"

    @pytest.mark.parametrize("key", ["wrong", "s3cret-dashboard-ke", "S3CRET-DASHBOARD-KEY"])
    def test_wrong_key_looks_like_unknown_route(
        self, make_app: Callable[..., Harness], key: str
    ) -> None:
        harness = make_app(RECRUITER_KEY=RECRUITER_KEY)

        response = harness.client.get(f"/r/{key}")
        unknown = harness.client.get("/definitely-not-a-page")

        assert response.status_code == 404
        assert response.json() == unknown.json()

    def test_unconfigured_key_always_404(self, harness: Harness) -> None:
        response = harness.client.get("/r/anything")
        assert response.status_code == 404


class TestLandingPage:
    def test_form_with_honeypot(self, harness: Harness) -> None:
        response = harness.client.get("/")

        assert response.status_code == 200
        assert 'name="company"' in response.text
        assert 'name="resume"' in response.text
        assert "cf-turnstile" not in response.text

    def test_turnstile_widget_when_site_key_set(self, make_app: Callable[..., Harness]) -> None:
        harness = make_app(TURNSTILE_SITE_KEY='0x4AAA"<key>')

        response = harness.client.get("/")

        assert 'data-sitekey="0x4AAA&quot;&lt;key&gt;"' in response.text
        assert "challenges.cloudflare.com/turnstile" in response.text


class TestSecurityHeaders:
    @pytest.mark.parametrize("path", ["/", "/health", "/r/nope", "/api/recruiter/data"])
    def test_headers_on_every_response(self, harness: Harness, path: str) -> None:
        response = harness.client.get(path, headers={"Origin": "https://evil.example"})

        for header, value in SECURITY_HEADERS.items():
            assert response.headers[header] == value

    def test_headers_on_unhandled_error(self, harness: Harness) -> None:
        """An unexpected exception still yields a generic 500 with the headers."""
        from fastapi.testclient import TestClient

        from conftest import READ_URL

        def _explode(request: object) -> object:
            raise RuntimeError("boom")

        harness.upstream.route(READ_URL, _explode)
        client = TestClient(harness.client.app, raise_server_exceptions=False)

        response = client.get("/api/recruiter/data")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}
        assert "boom" not in response.text
        for header, value in SECURITY_HEADERS.items():
            assert response.headers[header] == value
