"""
Shared fixtures for the coding assessment tests.

Upstream calls never leave the process: components are wired with
``FakeUpstreamClient``, which counts calls and replays scripted responses.
"""

import json
import os
import random

import pytest

# Keep settings deterministic regardless of the developer's environment
os.environ["LLM_HOST"] = ""
os.environ["LLM_TOKEN"] = ""
os.environ["LANGFUSE_ENABLED"] = "false"

from coding_assessment.config.settings import Settings
from coding_assessment.core.answer_reviewer import AnswerReviewer
from coding_assessment.core.mock_provider import MockProvider
from coding_assessment.core.orchestrator import AssessmentOrchestrator
from coding_assessment.core.question_generator import QuestionGenerator
from coding_assessment.core.text_extractor import TextExtractor
from coding_assessment.models.assessment import CodingAssessment, CodingQuestion
from coding_assessment.storage.artifact_storage import ArtifactStorage
from coding_assessment.storage.assessment_store import InMemoryAssessmentStore
from coding_assessment.storage.profile_store import InMemoryProfileStore


# =============================================================================
# CANNED UPSTREAM RESPONSES
# =============================================================================

QUESTION_SET = {
    "title": "Coding Assessment based on Resume Analysis",
    "description": "This assessment is tailored to your experience in backend services",
    "questions": [
        {
            "id": f"q{i}",
            "question": f"Question number {i}: implement the described routine",
            "difficulty": difficulty,
            "category": "algorithms",
            "expectedOutput": f"Output for question {i}",
        }
        for i, difficulty in enumerate(["easy", "easy", "medium", "hard", "hard"], start=1)
    ],
}

QUESTION_SET_JSON = json.dumps(QUESTION_SET)

REVIEW_JSON = json.dumps({
    "correctness": 85,
    "efficiency": 70,
    "readability": 80,
    "overallScore": 78,
    "feedback": "Solid solution with a clear structure.",
    "improvements": ["Handle empty input", "Name the helper more clearly"],
})

RESUME_TEXT = (
    "Jane Doe - Senior Backend Engineer\n"
    "Eight years building Python and Go services, PostgreSQL schemas, Kafka "
    "pipelines and REST APIs. Led migration of a monolith to event-driven "
    "microservices and cut p99 latency by 40%.\n"
)


class FakeUpstreamClient:
    """
    Stand-in for UpstreamClient.

    ``generation_response`` and the values of ``review_responses`` may be a
    string (returned) or an exception instance (raised). Reviews for
    question ids without a scripted entry return ``REVIEW_JSON``.
    """

    def __init__(self, generation_response=QUESTION_SET_JSON, review_responses=None, available=True):
        self.generation_response = generation_response
        self.review_responses = review_responses or {}
        self.available = available
        self.generation_calls = 0
        self.review_calls: list[str] = []
        self.scores: list[tuple[str, float]] = []

    @property
    def call_count(self) -> int:
        return self.generation_calls + len(self.review_calls)

    def is_available(self) -> bool:
        return self.available

    async def generate_questions(self, prompt: str) -> str:
        self.generation_calls += 1
        if isinstance(self.generation_response, Exception):
            raise self.generation_response
        return self.generation_response

    async def review_answer(self, prompt: str, question_id: str) -> str:
        self.review_calls.append(question_id)
        response = self.review_responses.get(question_id, REVIEW_JSON)
        if isinstance(response, Exception):
            raise response
        return response

    def record_score(self, name: str, value: float, comment: str | None = None) -> None:
        self.scores.append((name, value))

    async def close(self):
        pass


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_client():
    return FakeUpstreamClient()


@pytest.fixture
def mock_provider():
    return MockProvider(random.Random(1234))


@pytest.fixture
def make_settings():
    """Build settings without reading .env files."""
    def _make(**overrides) -> Settings:
        values = {"llm_host": "", "llm_token": "", **overrides}
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def sample_assessment():
    """Five-question assessment with predictable ids."""
    return CodingAssessment(
        id="assessment-1",
        user_id="user-1",
        title="Sample",
        description="Sample assessment",
        questions=[
            CodingQuestion(id=f"q{i}", question=f"Question {i}") for i in range(1, 6)
        ],
    )


@pytest.fixture
def make_orchestrator(make_settings, mock_provider, tmp_path):
    """
    Factory wiring an orchestrator around a fake client.

    Returns ``(orchestrator, client, profiles)``.
    """
    def _make(client=None, **setting_overrides):
        client = client or FakeUpstreamClient()
        settings = make_settings(resume_storage_dir=str(tmp_path), **setting_overrides)
        profiles = InMemoryProfileStore()
        orchestrator = AssessmentOrchestrator(
            settings=settings,
            store=InMemoryAssessmentStore(),
            profiles=profiles,
            extractor=TextExtractor(ArtifactStorage(tmp_path), min_chars=settings.min_resume_chars),
            generator=QuestionGenerator(client),
            reviewer=AnswerReviewer(
                client,
                mock_provider,
                fallback_enabled=settings.coding_review_fallback_to_mock,
            ),
            mock_provider=mock_provider,
        )
        return orchestrator, client, profiles
    return _make
