"""
Question Generator

Builds a prompt from resume text, makes one upstream call (no retry), repairs
the raw response and wraps the result into a fresh assessment.
"""

import logging

from coding_assessment.core.response_repair import repair_question_set
from coding_assessment.core.upstream_client import UpstreamClient
from coding_assessment.models.assessment import (
    AssessmentStatus,
    CodingAssessment,
    CodingQuestion,
    ContentSource,
    new_id,
    utc_now,
)
from coding_assessment.prompts.generation import GenerationPrompts

logger = logging.getLogger(__name__)

SYNTHESIZED_NOTICE = (
    "The generated questions could not be read, so a generic question set "
    "was provided instead."
)


class QuestionGenerator:
    """Live question generation against the upstream service."""

    def __init__(self, client: UpstreamClient):
        self.client = client
        self.prompts = GenerationPrompts()

    async def generate(self, resume_text: str | None) -> CodingAssessment:
        """
        Generate a coding assessment tailored to a resume.

        Args:
            resume_text: Extracted resume text, or None

        Returns:
            New assessment in NOT_STARTED state

        Raises:
            UpstreamUnavailableError: Client not configured or the call failed
        """
        logger.info("Generating coding questions based on resume")

        prompt = self.prompts.generate_questions_prompt(resume_text)
        response = await self.client.generate_questions(prompt)

        repaired = repair_question_set(response)
        logger.info(
            f"Question set recovered via {repaired.tier.value} "
            f"({len(repaired.value.questions)} questions)"
        )

        # Upstream ids are untrusted: always reassign
        questions = [
            CodingQuestion(
                id=new_id(),
                question=q.question,
                difficulty=q.difficulty,
                category=q.category,
                expected_output=q.expected_output,
            )
            for q in repaired.value.questions
        ]

        now = utc_now()
        return CodingAssessment(
            id=new_id(),
            title=repaired.value.title,
            description=repaired.value.description,
            questions=questions,
            status=AssessmentStatus.NOT_STARTED,
            created_at=now,
            updated_at=now,
            source=ContentSource.LIVE,
            repair_tier=repaired.tier.value,
            notice=SYNTHESIZED_NOTICE if repaired.degraded else None,
        )
