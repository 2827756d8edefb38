"""
Answer Reviewer

Reviews every answer of an assessment with one independent upstream call per
question, run concurrently and joined before returning.

Per-question failure handling:
- Unparseable review text: mock review substituted, batch continues
- Upstream failure: mock review substituted when fallback is enabled;
  otherwise the batch still runs to completion and then fails
"""

import asyncio
import logging
from dataclasses import dataclass

from coding_assessment.errors import (
    MalformedResponseError,
    UnansweredQuestionsError,
    UpstreamUnavailableError,
)
from coding_assessment.core.mock_provider import MockProvider
from coding_assessment.core.response_repair import repair_review
from coding_assessment.core.upstream_client import UpstreamClient
from coding_assessment.models.assessment import (
    AssessmentStatus,
    CodingAnswer,
    CodingAssessment,
    CodingQuestion,
    CodingReview,
    ContentSource,
    utc_now,
)
from coding_assessment.prompts.review import ReviewPrompts

logger = logging.getLogger(__name__)


@dataclass
class ReviewOutcome:
    """Result of one review task."""

    question_id: str
    review: CodingReview | None = None
    error: UpstreamUnavailableError | None = None


class AnswerReviewer:
    """
    Concurrent per-question reviewer.

    Each task writes only its own ``ReviewOutcome``; outcomes are gathered
    into the review map after every task has resolved.
    """

    def __init__(
        self,
        client: UpstreamClient,
        mock_provider: MockProvider,
        fallback_enabled: bool = False,
    ):
        self.client = client
        self.mock_provider = mock_provider
        self.fallback_enabled = fallback_enabled
        self.prompts = ReviewPrompts()

    # =========================================================================
    # SUBMISSION CHECKS
    # =========================================================================

    @staticmethod
    def prepare_answers(
        assessment: CodingAssessment,
        answers: dict[str, CodingAnswer],
    ) -> dict[str, CodingAnswer]:
        """
        Validate a submission and return the answers keyed by question.

        Answers for unknown question ids are dropped.

        Raises:
            UnansweredQuestionsError: Some question lacks a non-empty answer
        """
        for question_id in answers:
            if assessment.get_question(question_id) is None:
                logger.warning(f"Question {question_id} not found in assessment {assessment.id}")

        missing = assessment.missing_answers(answers)
        if missing:
            raise UnansweredQuestionsError(missing)

        return {
            q.id: answers[q.id].model_copy(update={"question_id": q.id})
            for q in assessment.questions
        }

    # =========================================================================
    # REVIEW
    # =========================================================================

    async def review(
        self,
        assessment: CodingAssessment,
        answers: dict[str, CodingAnswer],
        mock: bool = False,
    ) -> CodingAssessment:
        """
        Review all answers and return the updated assessment.

        Args:
            assessment: Persisted assessment
            answers: Submitted answers keyed by question id
            mock: Skip upstream calls and synthesize every review

        Returns:
            Assessment with answers, reviews and REVIEWED status

        Raises:
            UnansweredQuestionsError: Before any upstream call is made
            UpstreamUnavailableError: A call failed and fallback is disabled
        """
        submitted = self.prepare_answers(assessment, answers)

        if mock:
            logger.info("Using MOCK mode, returning simulated reviews")
            reviews = {
                q.id: self.mock_provider.mock_review(q.id, ContentSource.MOCK)
                for q in assessment.questions
            }
        else:
            # Fan-out: one task per question; fan-in before anything is updated
            outcomes = await asyncio.gather(*(
                self._review_one(question, submitted[question.id])
                for question in assessment.questions
            ))

            failures = [o for o in outcomes if o.error is not None]
            if failures:
                ids = ", ".join(o.question_id for o in failures)
                raise UpstreamUnavailableError(
                    f"Review failed for {len(failures)} question(s): {ids}"
                ) from failures[0].error

            reviews = {o.question_id: o.review for o in outcomes}

        synthesized = sum(1 for r in reviews.values() if r.source != ContentSource.LIVE)
        logger.info(
            f"Reviewed {len(reviews)} answers for assessment {assessment.id} "
            f"({synthesized} synthesized)"
        )

        return assessment.model_copy(update={
            "answers": submitted,
            "reviews": reviews,
            "status": AssessmentStatus.REVIEWED,
            "updated_at": utc_now(),
            "notice": _review_notice(synthesized, len(reviews), mock),
        })

    async def _review_one(self, question: CodingQuestion, answer: CodingAnswer) -> ReviewOutcome:
        """Review one answer; always resolves, never raises."""
        try:
            review = await self._live_review(question, answer)
            logger.info(f"Completed review for question {question.id}")
            return ReviewOutcome(question.id, review=review)

        except MalformedResponseError as e:
            logger.warning(f"Falling back to mock review for question {question.id}: {e}")
            return ReviewOutcome(
                question.id,
                review=self.mock_provider.mock_review(question.id, ContentSource.FALLBACK),
            )

        except UpstreamUnavailableError as e:
            logger.error(f"Error reviewing answer for question {question.id}: {e}")
            if not self.fallback_enabled:
                return ReviewOutcome(question.id, error=e)
            logger.warning(f"Falling back to mock review for question {question.id}")
            return ReviewOutcome(
                question.id,
                review=self.mock_provider.mock_review(question.id, ContentSource.FALLBACK),
            )

        except Exception as e:
            # Isolate anything unexpected to this question as an upstream failure
            logger.exception(f"Unexpected error reviewing question {question.id}")
            error = UpstreamUnavailableError(f"Review call failed: {e}")
            if not self.fallback_enabled:
                return ReviewOutcome(question.id, error=error)
            return ReviewOutcome(
                question.id,
                review=self.mock_provider.mock_review(question.id, ContentSource.FALLBACK),
            )

    async def _live_review(self, question: CodingQuestion, answer: CodingAnswer) -> CodingReview:
        prompt = self.prompts.generate_review_prompt(
            question=question.question,
            answer=answer.answer,
            language=answer.language,
            expected_output=question.expected_output,
        )
        response = await self.client.review_answer(prompt, question.id)

        repaired = repair_review(response)
        if repaired is None:
            raise MalformedResponseError("Invalid JSON response from AI service")

        parsed = repaired.value
        self.client.record_score(
            name="overall_score",
            value=parsed.overall_score,
            comment=f"Question: {question.id}",
        )
        return CodingReview(
            question_id=question.id,
            correctness=parsed.correctness,
            efficiency=parsed.efficiency,
            readability=parsed.readability,
            overall_score=parsed.overall_score,
            feedback=parsed.feedback,
            improvements=parsed.improvements,
            reviewed_at=utc_now(),
            source=ContentSource.LIVE,
        )


def _review_notice(synthesized: int, total: int, mock: bool) -> str | None:
    if mock:
        return "Reviews were generated in mock mode and do not reflect your code."
    if synthesized:
        return (
            f"{synthesized} of {total} reviews could not be produced live and were "
            f"replaced with sample reviews."
        )
    return None
