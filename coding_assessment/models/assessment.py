"""
Coding assessment models for the assessment pipeline.

Wire format is camelCase (``expectedOutput``, ``overallScore``...) to match
what the upstream service is asked to emit and what clients consume; models
accept either the alias or the field name on input.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Timezone-naive UTC timestamp, matching the rest of the models."""
    return datetime.utcnow()


def new_id() -> str:
    return str(uuid4())


class CamelModel(BaseModel):
    """Base model serialising to camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Difficulty(str, Enum):
    """Question difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AssessmentStatus(str, Enum):
    """
    Assessment lifecycle states.

    Only NOT_STARTED and REVIEWED are driven by the pipeline; the two
    intermediate states exist for clients that track progress themselves.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REVIEWED = "reviewed"


class ContentSource(str, Enum):
    """Where a piece of generated content came from."""

    LIVE = "live"          # Upstream service
    MOCK = "mock"          # Mock mode, upstream never called
    FALLBACK = "fallback"  # Upstream failed, synthetic content substituted


class CodingQuestion(CamelModel):
    """A single language-agnostic coding question."""

    id: str = Field(default_factory=new_id, description="Unique within an assessment")
    question: str = Field(..., min_length=1, description="Question text")
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM)
    category: str = Field(default="general")
    expected_output: str | None = Field(
        default=None,
        description="Expected output or acceptance criteria"
    )


class CodingAnswer(CamelModel):
    """A candidate's answer to one question."""

    question_id: str
    answer: str = ""
    language: str = "javascript"
    submitted_at: datetime = Field(default_factory=utc_now)


class CodingReview(CamelModel):
    """Scored review of a single answer."""

    question_id: str
    correctness: int = Field(..., ge=0, le=100)
    efficiency: int = Field(..., ge=0, le=100)
    readability: int = Field(..., ge=0, le=100)
    overall_score: int = Field(..., ge=0, le=100)
    feedback: str
    improvements: list[str] = Field(default_factory=list)
    reviewed_at: datetime = Field(default_factory=utc_now)
    source: ContentSource = ContentSource.LIVE


class CodingAssessment(CamelModel):
    """Questions, answers and reviews for one candidate attempt."""

    id: str = Field(default_factory=new_id)
    user_id: str | None = None
    title: str
    description: str
    questions: list[CodingQuestion] = Field(..., min_length=1)
    answers: dict[str, CodingAnswer] = Field(default_factory=dict)
    reviews: dict[str, CodingReview] = Field(default_factory=dict)
    status: AssessmentStatus = AssessmentStatus.NOT_STARTED
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Degradation tracking
    source: ContentSource = ContentSource.LIVE
    repair_tier: str | None = Field(
        default=None,
        description="Repair cascade tier that produced the questions"
    )
    notice: str | None = Field(
        default=None,
        description="Shown to the candidate when content is not fully live"
    )

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self.questions]

    def get_question(self, question_id: str) -> CodingQuestion | None:
        """Get a question by ID."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def missing_answers(self, answers: dict[str, CodingAnswer]) -> list[str]:
        """IDs of questions without a non-empty answer, in question order."""
        return [
            q.id for q in self.questions
            if q.id not in answers or not answers[q.id].answer.strip()
        ]


class ParsedQuestion(BaseModel):
    """A question as recovered from upstream text, before ids are reassigned."""

    id: str | None = None
    question: str
    difficulty: Difficulty = Difficulty.MEDIUM
    category: str = "general"
    expected_output: str | None = None


class ParsedQuestionSet(BaseModel):
    """Structured result of repairing a generation response."""

    title: str
    description: str
    questions: list[ParsedQuestion]


class ParsedReview(BaseModel):
    """Structured result of repairing a review response."""

    correctness: int = Field(..., ge=0, le=100)
    efficiency: int = Field(..., ge=0, le=100)
    readability: int = Field(..., ge=0, le=100)
    overall_score: int = Field(..., ge=0, le=100)
    feedback: str
    improvements: list[str] = Field(default_factory=list)
