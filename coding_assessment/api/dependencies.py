"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

import logging

from coding_assessment.config.settings import get_settings
from coding_assessment.core.answer_reviewer import AnswerReviewer
from coding_assessment.core.mock_provider import MockProvider
from coding_assessment.core.orchestrator import AssessmentOrchestrator
from coding_assessment.core.question_generator import QuestionGenerator
from coding_assessment.core.text_extractor import TextExtractor
from coding_assessment.core.upstream_client import UpstreamClient
from coding_assessment.storage.artifact_storage import ArtifactStorage
from coding_assessment.storage.assessment_store import InMemoryAssessmentStore
from coding_assessment.storage.profile_store import InMemoryProfileStore

logger = logging.getLogger(__name__)


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_orchestrator: AssessmentOrchestrator | None = None
_upstream_client: UpstreamClient | None = None
_artifact_storage: ArtifactStorage | None = None


def get_upstream_client() -> UpstreamClient:
    """Get the upstream client singleton."""
    global _upstream_client

    if _upstream_client is None:
        _upstream_client = UpstreamClient(get_settings())

    return _upstream_client


def get_artifact_storage() -> ArtifactStorage:
    """Get the resume artifact storage singleton."""
    global _artifact_storage

    if _artifact_storage is None:
        settings = get_settings()
        _artifact_storage = ArtifactStorage(
            settings.resume_storage_dir,
            timeout=settings.llm_timeout_seconds,
        )

    return _artifact_storage


def get_orchestrator() -> AssessmentOrchestrator:
    """
    Get the assessment orchestrator singleton.

    Lazily initializes all required components.
    """
    global _orchestrator

    if _orchestrator is None:
        settings = get_settings()
        client = get_upstream_client()
        mock_provider = MockProvider()

        _orchestrator = AssessmentOrchestrator(
            settings=settings,
            store=InMemoryAssessmentStore(),
            profiles=InMemoryProfileStore(),
            extractor=TextExtractor(get_artifact_storage(), min_chars=settings.min_resume_chars),
            generator=QuestionGenerator(client),
            reviewer=AnswerReviewer(
                client,
                mock_provider,
                fallback_enabled=settings.coding_review_fallback_to_mock,
            ),
            mock_provider=mock_provider,
        )
        logger.info(
            f"Assessment pipeline ready (upstream={'on' if client.is_available() else 'off'}, "
            f"questions_mock={settings.coding_questions_mock_mode}, "
            f"review_mock={settings.coding_review_mock_mode})"
        )

    return _orchestrator


async def cleanup():
    """Cleanup resources on shutdown."""
    global _orchestrator, _upstream_client, _artifact_storage

    if _upstream_client:
        await _upstream_client.close()
        _upstream_client = None

    if _artifact_storage:
        await _artifact_storage.close()
        _artifact_storage = None

    _orchestrator = None
