"""
Assessment API endpoints

Handles:
- Generating a coding assessment from a resume
- Submitting answers for review
- Listing and retrieving a user's assessments
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from coding_assessment.api.dependencies import get_orchestrator
from coding_assessment.core.orchestrator import AssessmentOrchestrator
from coding_assessment.errors import AssessmentError, UnansweredQuestionsError
from coding_assessment.models.assessment import CamelModel, CodingAssessment

router = APIRouter()


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateRequest(CamelModel):
    """Request model for assessment generation."""
    user_id: str | None = None
    resume_ref: str | None = None
    resume_text: str | None = None


class SubmitRequest(CamelModel):
    """Request model for answer submission."""
    user_id: str | None = None
    assessment_id: str | None = None
    answers: dict[str, Any] = Field(default_factory=dict)


def _http_error(error: AssessmentError) -> HTTPException:
    """Translate a pipeline error into an HTTP error."""
    if isinstance(error, UnansweredQuestionsError):
        return HTTPException(
            status_code=error.status_code,
            detail={
                "message": error.detail,
                "missingQuestionIds": error.missing_question_ids,
            },
        )
    return HTTPException(status_code=error.status_code, detail=error.detail)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/generate", response_model=CodingAssessment)
async def generate_assessment(
    request: GenerateRequest,
    orchestrator: AssessmentOrchestrator = Depends(get_orchestrator),
) -> CodingAssessment:
    """
    Generate a coding assessment for a user.

    Uses ``resumeText`` when given, otherwise ``resumeRef``, otherwise the
    resume stored on the user's profile.
    """
    try:
        return await orchestrator.generate_assessment(
            request.user_id,
            resume_ref=request.resume_ref,
            resume_text=request.resume_text,
        )
    except AssessmentError as e:
        raise _http_error(e) from e


@router.post("/submit", response_model=CodingAssessment)
async def submit_answers(
    request: SubmitRequest,
    orchestrator: AssessmentOrchestrator = Depends(get_orchestrator),
) -> CodingAssessment:
    """
    Submit answers for review.

    Every question must carry a non-empty answer; nothing is reviewed
    otherwise.
    """
    try:
        return await orchestrator.review_assessment(
            request.user_id,
            request.assessment_id,
            request.answers,
        )
    except AssessmentError as e:
        raise _http_error(e) from e


@router.get("/{user_id}", response_model=list[CodingAssessment])
async def list_assessments(
    user_id: str,
    orchestrator: AssessmentOrchestrator = Depends(get_orchestrator),
) -> list[CodingAssessment]:
    """List a user's assessments, newest first."""
    try:
        return await orchestrator.list_assessments(user_id)
    except AssessmentError as e:
        raise _http_error(e) from e


@router.get("/{user_id}/{assessment_id}", response_model=CodingAssessment)
async def get_assessment(
    user_id: str,
    assessment_id: str,
    orchestrator: AssessmentOrchestrator = Depends(get_orchestrator),
) -> CodingAssessment:
    """Get one assessment."""
    try:
        return await orchestrator.get_assessment(user_id, assessment_id)
    except AssessmentError as e:
        raise _http_error(e) from e
