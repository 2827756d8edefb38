"""
Tests for live question generation.
"""

import pytest

from coding_assessment.core.question_generator import QuestionGenerator
from coding_assessment.errors import UpstreamUnavailableError
from coding_assessment.models.assessment import AssessmentStatus, ContentSource

from conftest import QUESTION_SET, RESUME_TEXT, FakeUpstreamClient


class TestQuestionGenerator:
    @pytest.mark.asyncio
    async def test_generates_assessment(self, fake_client):
        assessment = await QuestionGenerator(fake_client).generate(RESUME_TEXT)

        assert fake_client.generation_calls == 1
        assert assessment.title == QUESTION_SET["title"]
        assert len(assessment.questions) == 5
        assert assessment.status == AssessmentStatus.NOT_STARTED
        assert assessment.source == ContentSource.LIVE
        assert assessment.repair_tier == "direct"
        assert assessment.notice is None
        assert not assessment.answers and not assessment.reviews

    @pytest.mark.asyncio
    async def test_upstream_ids_are_replaced(self, fake_client):
        generator = QuestionGenerator(fake_client)

        first = await generator.generate(RESUME_TEXT)
        second = await generator.generate(RESUME_TEXT)

        upstream_ids = {q["id"] for q in QUESTION_SET["questions"]}
        assert not set(first.question_ids) & upstream_ids
        assert len(set(first.question_ids)) == len(first.questions)
        assert not set(first.question_ids) & set(second.question_ids)
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_unreadable_response_is_synthesized_with_notice(self):
        client = FakeUpstreamClient(generation_response="Sorry, I cannot help with that.")

        assessment = await QuestionGenerator(client).generate(RESUME_TEXT)

        assert assessment.repair_tier == "synthesized"
        assert len(assessment.questions) == 3
        assert assessment.notice
        assert assessment.source == ContentSource.LIVE

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self):
        client = FakeUpstreamClient(generation_response=UpstreamUnavailableError("down"))

        with pytest.raises(UpstreamUnavailableError):
            await QuestionGenerator(client).generate(RESUME_TEXT)
        assert client.generation_calls == 1
