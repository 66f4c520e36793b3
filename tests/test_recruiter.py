"""Tests for GET /api/recruiter/data."""

from __future__ import annotations

from collections.abc import Callable

from conftest import READ_URL, SERVER_ORIGIN, Harness

DATA_PATH = "/api/recruiter/data"

UPSTREAM_ROWS = [
    {
        "id": "r1",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "jobTitle": "Engineer",
        "highlights": "math, poetry",
        "yearsExperience": 12,
        "credibilityScore": 140,
        "atsScore": "77",
        "createdAt": "2026-01-02T03:04:05.000Z",
    },
    {"name": "No Fields"},
]


class TestRecruiterData:
    def test_returns_normalized_candidates(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, json=UPSTREAM_ROWS)

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["updatedAt"].endswith("Z")
        assert len(body["data"]) == 2
        first = body["data"][0]
        assert first["jobTitle"] == "Engineer"
        assert first["highlights"] == ["math", "poetry"]
        assert first["skills"] == ["math", "poetry"]
        assert first["credibilityScore"] == 100
        assert first["atsScore"] == 77
        assert body["data"][1]["email"] == ""

    def test_upstream_request_shape(self, make_app: Callable[..., Harness]) -> None:
        """Auth header forwarded verbatim, caching disabled, JSON requested."""
        harness = make_app(N8N_READ_AUTH="Bearer abc123")
        harness.upstream.respond(READ_URL, json=[])

        harness.client.get(DATA_PATH)

        (sent,) = harness.upstream.calls_to(READ_URL)
        assert sent.method == "GET"
        assert sent.headers["authorization"] == "Bearer abc123"
        assert sent.headers["accept"] == "application/json"
        assert sent.headers["cache-control"] == "no-store"

    def test_no_auth_header_when_unset(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, json=[])

        harness.client.get(DATA_PATH)

        (sent,) = harness.upstream.calls_to(READ_URL)
        assert "authorization" not in sent.headers

    def test_out_of_range_integer_scores_degrade_to_zero(self, harness: Harness) -> None:
        huge = "1" + "0" * 400
        harness.upstream.respond(
            READ_URL,
            text=f'[{{"name": "Big", "atsScore": {huge}, "yearsExperience": {huge}}}]',
            headers={"content-type": "application/json"},
        )

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 200
        (candidate,) = response.json()["data"]
        assert candidate["name"] == "Big"
        assert candidate["atsScore"] == 0
        assert candidate["yearsExperience"] == 0

    def test_non_array_payload_yields_empty_list(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, json={"rows": UPSTREAM_ROWS})

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestRecruiterDataGuard:
    def test_cross_origin_rejected_before_limiter_and_upstream(self, harness: Harness) -> None:
        response = harness.client.get(DATA_PATH, headers={"Origin": "https://evil.example"})

        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden"}
        assert harness.upstream.requests == []
        assert len(harness.context.read_limiter) == 0

    def test_foreign_referer_rejected(self, harness: Harness) -> None:
        response = harness.client.get(DATA_PATH, headers={"Referer": "https://evil.example/x"})
        assert response.status_code == 403

    def test_same_origin_headers_accepted(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, json=[])

        response = harness.client.get(
            DATA_PATH,
            headers={"Origin": SERVER_ORIGIN, "Referer": f"{SERVER_ORIGIN}/r/key"},
        )

        assert response.status_code == 200

    def test_rate_limited_after_thirty_requests(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, json=[])
        headers = {"X-Forwarded-For": "203.0.113.50"}

        statuses = [harness.client.get(DATA_PATH, headers=headers).status_code for _ in range(31)]

        assert statuses[:30] == [200] * 30
        assert statuses[30] == 429
        assert len(harness.upstream.calls_to(READ_URL)) == 30

        other = harness.client.get(DATA_PATH, headers={"X-Forwarded-For": "203.0.113.51"})
        assert other.status_code == 200


class TestRecruiterDataFailures:
    def test_missing_read_url(self, make_app: Callable[..., Harness]) -> None:
        harness = make_app(N8N_READ_URL="")

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 500
        assert response.json() == {"message": "Server not configured"}

    def test_transport_failure(self, harness: Harness) -> None:
        harness.upstream.fail(READ_URL)

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 502
        assert response.json() == {"message": "Upstream error"}

    def test_error_status_preserved_with_truncated_body(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, status_code=503, text="x" * 2000)

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 502
        body = response.json()
        assert body["message"] == "Upstream returned error"
        assert body["upstreamStatus"] == 503
        assert body["body"] == "x" * 500

    def test_invalid_json(self, harness: Harness) -> None:
        harness.upstream.respond(READ_URL, text="<html>oops</html>")

        response = harness.client.get(DATA_PATH)

        assert response.status_code == 502
        assert response.json() == {"message": "Invalid upstream JSON"}


class TestErrorModel:
    def test_error_responses_documented_with_wire_names(self, harness: Harness) -> None:
        schema = harness.client.get("/openapi.json").json()

        properties = schema["components"]["schemas"]["ErrorResponse"]["properties"]
        assert set(properties) == {"message", "upstreamStatus", "body"}
        data_responses = schema["paths"]["/api/recruiter/data"]["get"]["responses"]
        assert {"403", "429", "500", "502"} <= set(data_responses)
