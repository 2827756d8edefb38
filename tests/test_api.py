"""
Endpoint tests for the assessment API.

The orchestrator dependency is overridden with one wired around a fake
upstream client, so no request leaves the process.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from coding_assessment.api.dependencies import get_orchestrator
from coding_assessment.errors import UpstreamUnavailableError
from main import app

from conftest import QUESTION_SET, RESUME_TEXT, FakeUpstreamClient


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def api(make_orchestrator):
    """TestClient plus the fake upstream client behind it."""
    orchestrator, client, _ = make_orchestrator()
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app), client
    app.dependency_overrides.clear()


def _generate(http) -> dict:
    response = http.post(
        "/api/assessments/generate",
        json={"userId": "user-1", "resumeText": RESUME_TEXT},
    )
    assert response.status_code == 200
    return response.json()


# =============================================================================
# ENDPOINTS
# =============================================================================

class TestAssessmentEndpoints:
    def test_generate_returns_camel_case(self, api):
        http, client = api

        body = _generate(http)

        assert client.generation_calls == 1
        assert body["userId"] == "user-1"
        assert body["title"] == QUESTION_SET["title"]
        assert body["status"] == "not_started"
        assert body["source"] == "live"
        assert len(body["questions"]) == 5
        assert "expectedOutput" in body["questions"][0]
        assert "createdAt" in body

    def test_generate_requires_user(self, api):
        http, _ = api

        response = http.post("/api/assessments/generate", json={"resumeText": RESUME_TEXT})

        assert response.status_code == 400

    def test_generate_short_resume(self, api):
        http, _ = api

        response = http.post(
            "/api/assessments/generate",
            json={"userId": "user-1", "resumeText": "too short"},
        )

        assert response.status_code == 400

    def test_submit_reviews_answers(self, api):
        http, client = api
        assessment = _generate(http)
        answers = {
            q["id"]: {"answer": "return sorted(items)", "language": "python"}
            for q in assessment["questions"]
        }

        response = http.post(
            "/api/assessments/submit",
            json={"userId": "user-1", "assessmentId": assessment["id"], "answers": answers},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "reviewed"
        assert len(client.review_calls) == 5
        review = body["reviews"][assessment["questions"][0]["id"]]
        assert review["overallScore"] == 78
        assert review["source"] == "live"

    def test_submit_with_missing_answer(self, api):
        http, client = api
        assessment = _generate(http)
        first_id = assessment["questions"][0]["id"]

        response = http.post(
            "/api/assessments/submit",
            json={
                "userId": "user-1",
                "assessmentId": assessment["id"],
                "answers": {first_id: {"answer": "x"}},
            },
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert "4 remaining" in detail["message"]
        assert len(detail["missingQuestionIds"]) == 4
        assert first_id not in detail["missingQuestionIds"]
        assert client.review_calls == []

    def test_submit_unknown_assessment(self, api):
        http, _ = api

        response = http.post(
            "/api/assessments/submit",
            json={"userId": "user-1", "assessmentId": "nope", "answers": {"q1": {"answer": "x"}}},
        )

        assert response.status_code == 404

    def test_list_and_get(self, api):
        http, _ = api
        first = _generate(http)
        second = _generate(http)

        listed = http.get("/api/assessments/user-1").json()
        assert {a["id"] for a in listed} == {first["id"], second["id"]}
        assert http.get("/api/assessments/user-2").json() == []

        response = http.get(f"/api/assessments/user-1/{first['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == first["id"]

        assert http.get("/api/assessments/user-1/missing").status_code == 404

    def test_upstream_failure_is_500(self, make_orchestrator):
        client = FakeUpstreamClient(generation_response=UpstreamUnavailableError("down"))
        orchestrator, _, _ = make_orchestrator(client)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        try:
            response = TestClient(app).post(
                "/api/assessments/generate",
                json={"userId": "user-1", "resumeText": RESUME_TEXT},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500


class TestHealth:
    def test_health_reports_upstream(self):
        with patch("main.get_upstream_client", return_value=FakeUpstreamClient(available=False)):
            response = TestClient(app).get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["upstream_available"] is False
