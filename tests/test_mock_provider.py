"""
Tests for synthetic questions and reviews.
"""

import random

from coding_assessment.core.mock_provider import (
    IMPROVEMENT_COUNT,
    IMPROVEMENT_POOL,
    MOCK_QUESTIONS,
    MOCK_TITLE,
    SCORE_MAX,
    SCORE_MIN,
    MockProvider,
)
from coding_assessment.models.assessment import AssessmentStatus, ContentSource


class TestMockAssessment:
    def test_fixed_question_set(self, mock_provider):
        assessment = mock_provider.mock_assessment()

        assert assessment.title == MOCK_TITLE
        assert len(assessment.questions) == len(MOCK_QUESTIONS) == 5
        assert assessment.status == AssessmentStatus.NOT_STARTED
        assert assessment.source == ContentSource.MOCK
        assert assessment.notice

    def test_fresh_ids_each_call(self, mock_provider):
        first = mock_provider.mock_assessment()
        second = mock_provider.mock_assessment()

        assert first.id != second.id
        assert len(set(first.question_ids)) == 5
        assert not set(first.question_ids) & set(second.question_ids)

    def test_fallback_source_is_recorded(self, mock_provider):
        assessment = mock_provider.mock_assessment(ContentSource.FALLBACK)

        assert assessment.source == ContentSource.FALLBACK
        assert "unavailable" in assessment.notice


class TestMockReview:
    def test_scores_within_bounds(self, mock_provider):
        for i in range(200):
            review = mock_provider.mock_review(f"q{i}")

            for score in (review.correctness, review.efficiency, review.readability):
                assert SCORE_MIN <= score <= SCORE_MAX
            assert review.overall_score == (
                review.correctness + review.efficiency + review.readability
            ) // 3

    def test_three_distinct_improvements(self, mock_provider):
        for i in range(50):
            review = mock_provider.mock_review(f"q{i}")

            assert len(review.improvements) == IMPROVEMENT_COUNT == 3
            assert len(set(review.improvements)) == 3
            assert set(review.improvements) <= set(IMPROVEMENT_POOL)

    def test_feedback_is_present(self, mock_provider):
        review = mock_provider.mock_review("q1")

        assert review.question_id == "q1"
        assert review.feedback.startswith("Your solution")
        assert review.source == ContentSource.MOCK

    def test_seeded_rng_is_reproducible(self):
        first = MockProvider(random.Random(7)).mock_review("q1")
        second = MockProvider(random.Random(7)).mock_review("q1")

        assert first.model_dump(exclude={"reviewed_at"}) == second.model_dump(exclude={"reviewed_at"})
