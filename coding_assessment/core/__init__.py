"""
Core business logic modules for the coding assessment pipeline

Contains:
- Assessment Orchestrator: generation and review entry points
- Question Generator: resume-tailored question sets
- Answer Reviewer: concurrent per-question reviews
- Response Repair: recovery of structured data from upstream text
- Mock Provider: synthetic questions and reviews
- Text Extractor: resume text cleanup
- Upstream Client: text-generation service access
"""

from coding_assessment.core.orchestrator import AssessmentOrchestrator
from coding_assessment.core.question_generator import QuestionGenerator
from coding_assessment.core.answer_reviewer import AnswerReviewer
from coding_assessment.core.mock_provider import MockProvider
from coding_assessment.core.text_extractor import TextExtractor
from coding_assessment.core.upstream_client import UpstreamClient

__all__ = [
    "AssessmentOrchestrator",
    "QuestionGenerator",
    "AnswerReviewer",
    "MockProvider",
    "TextExtractor",
    "UpstreamClient",
]
