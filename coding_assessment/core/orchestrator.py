"""
Assessment Orchestrator - entry points for generating and reviewing assessments.

Wires the text extractor, question generator, answer reviewer and mock
provider together, validates input, and applies the MOCK / FALLBACK mode
matrix for each operation family:

    MOCK   FALLBACK   on live failure
    true   -          upstream never called, always synthetic
    false  true       synthetic result substituted, request succeeds
    false  false      request fails
"""

import logging
from typing import Any

from pydantic import ValidationError

from coding_assessment.config.settings import Settings
from coding_assessment.core.answer_reviewer import AnswerReviewer
from coding_assessment.errors import (
    AssessmentNotFoundError,
    InputValidationError,
    InsufficientResumeError,
    ResumeNotFoundError,
    UpstreamUnavailableError,
)
from coding_assessment.core.mock_provider import MockProvider
from coding_assessment.core.question_generator import QuestionGenerator
from coding_assessment.core.text_extractor import TextExtractor
from coding_assessment.models.assessment import (
    CodingAnswer,
    CodingAssessment,
    ContentSource,
)
from coding_assessment.storage.assessment_store import AssessmentStore
from coding_assessment.storage.profile_store import ProfileStore

logger = logging.getLogger(__name__)


class AssessmentOrchestrator:
    """
    Coordinates the generation and review pipelines.

    Mode flags are taken from settings once, at construction.
    """

    def __init__(
        self,
        settings: Settings,
        store: AssessmentStore,
        profiles: ProfileStore,
        extractor: TextExtractor,
        generator: QuestionGenerator,
        reviewer: AnswerReviewer,
        mock_provider: MockProvider,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            settings: Application settings (mode flags)
            store: Assessment persistence
            profiles: Profile lookup for stored resume references
            extractor: Resume text extraction
            generator: Live question generation
            reviewer: Concurrent answer review
            mock_provider: Synthetic content
        """
        self.store = store
        self.profiles = profiles
        self.extractor = extractor
        self.generator = generator
        self.reviewer = reviewer
        self.mock_provider = mock_provider

        self.generation_mock = settings.coding_questions_mock_mode
        self.generation_fallback = settings.coding_questions_fallback_to_mock
        self.review_mock = settings.coding_review_mock_mode

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate_assessment(
        self,
        user_id: str | None,
        resume_ref: str | None = None,
        resume_text: str | None = None,
    ) -> CodingAssessment:
        """
        Generate and persist a coding assessment for a user.

        Args:
            user_id: Owner of the assessment
            resume_ref: Stored resume reference; defaults to the profile's
            resume_text: Raw resume text, used instead of any reference

        Returns:
            The persisted assessment

        Raises:
            InputValidationError: Missing user id, or (without fallback) no
                usable resume
            UpstreamUnavailableError: Live generation failed without fallback
        """
        if not user_id or not user_id.strip():
            raise InputValidationError("User ID is required")

        if self.generation_mock:
            logger.info("Using MOCK mode, returning simulated coding questions")
            assessment = self.mock_provider.mock_assessment(ContentSource.MOCK)
            return await self._persist_new(user_id, assessment)

        try:
            text = await self._resolve_resume_text(user_id, resume_ref, resume_text)
            assessment = await self._generate_live(text)
        except (InsufficientResumeError, ResumeNotFoundError, UpstreamUnavailableError) as e:
            if not self.generation_fallback:
                raise
            logger.warning(f"Falling back to mock questions: {e}")
            assessment = self.mock_provider.mock_assessment(ContentSource.FALLBACK)

        return await self._persist_new(user_id, assessment)

    async def _generate_live(self, resume_text: str) -> CodingAssessment:
        try:
            return await self.generator.generate(resume_text)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            # Anything unexpected is treated as an upstream failure
            logger.exception("Unexpected error generating coding questions")
            raise UpstreamUnavailableError(f"Question generation failed: {e}") from e

    async def _resolve_resume_text(
        self,
        user_id: str,
        resume_ref: str | None,
        resume_text: str | None,
    ) -> str:
        if resume_text is not None:
            result = self.extractor.from_text(resume_text)
        else:
            ref = resume_ref
            if not ref:
                logger.info("Resume reference not provided, fetching from profile")
                ref = await self.profiles.get_resume_ref(user_id)
            if not ref:
                raise ResumeNotFoundError("Resume not found. Please upload a resume first.")
            result = await self.extractor.from_artifact(ref)

        if result.insufficient:
            raise InsufficientResumeError("Failed to extract enough text from resume")
        return result.text

    async def _persist_new(self, user_id: str, assessment: CodingAssessment) -> CodingAssessment:
        assessment.user_id = user_id
        assessment_id = await self.store.create(assessment)
        stored = await self.store.get(user_id, assessment_id)
        logger.info(
            f"Generated assessment {assessment_id} for user {user_id} "
            f"(source={stored.source.value}, questions={len(stored.questions)})"
        )
        return stored

    # =========================================================================
    # REVIEW
    # =========================================================================

    async def review_assessment(
        self,
        user_id: str | None,
        assessment_id: str | None,
        answers: dict[str, Any] | None,
    ) -> CodingAssessment:
        """
        Review submitted answers and persist the reviewed assessment.

        Args:
            user_id: Owner of the assessment
            assessment_id: Assessment to review
            answers: Answers keyed by question id (models or plain dicts)

        Returns:
            The persisted, reviewed assessment

        Raises:
            InputValidationError: Missing fields or unanswered questions
            AssessmentNotFoundError: No such assessment for this user
            UpstreamUnavailableError: A review call failed without fallback
        """
        if not user_id or not assessment_id or not answers:
            raise InputValidationError("User ID, assessment ID, and answers are required")

        submitted = _coerce_answers(answers)

        assessment = await self.store.get(user_id, assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError("Assessment not found")

        reviewed = await self.reviewer.review(assessment, submitted, mock=self.review_mock)

        return await self.store.update(user_id, assessment_id, {
            "answers": reviewed.answers,
            "reviews": reviewed.reviews,
            "status": reviewed.status,
            "notice": reviewed.notice,
        })

    async def list_assessments(self, user_id: str) -> list[CodingAssessment]:
        """All assessments for a user, newest first."""
        if not user_id:
            raise InputValidationError("User ID is required")
        return await self.store.list_for_user(user_id)

    async def get_assessment(self, user_id: str, assessment_id: str) -> CodingAssessment:
        """Get one assessment or raise AssessmentNotFoundError."""
        assessment = await self.store.get(user_id, assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError("Assessment not found")
        return assessment


def _coerce_answers(answers: dict[str, Any]) -> dict[str, CodingAnswer]:
    coerced = {}
    for question_id, answer in answers.items():
        if isinstance(answer, CodingAnswer):
            coerced[question_id] = answer
        elif isinstance(answer, dict):
            data = {"questionId": question_id, **answer}
            try:
                coerced[question_id] = CodingAnswer.model_validate(data)
            except ValidationError as e:
                raise InputValidationError(f"Invalid answer for question {question_id}: {e}") from e
        else:
            raise InputValidationError(f"Invalid answer for question {question_id}")
    return coerced
