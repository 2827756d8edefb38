"""
Data models and schemas for the coding assessment pipeline

Contains Pydantic models for:
- Coding questions, answers and reviews
- Assessments and their lifecycle
- Structured results recovered from upstream text
"""

from coding_assessment.models.assessment import (
    AssessmentStatus,
    CodingAnswer,
    CodingAssessment,
    CodingQuestion,
    CodingReview,
    ContentSource,
    Difficulty,
    ParsedQuestion,
    ParsedQuestionSet,
    ParsedReview,
)

__all__ = [
    # Assessment
    "AssessmentStatus",
    "CodingAssessment",
    "ContentSource",
    # Question / answer / review
    "CodingQuestion",
    "CodingAnswer",
    "CodingReview",
    "Difficulty",
    # Parsed upstream output
    "ParsedQuestion",
    "ParsedQuestionSet",
    "ParsedReview",
]
