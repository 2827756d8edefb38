"""
Assessment persistence.

The store owns assessments keyed by ``(user_id, assessment_id)`` and assumes
no concurrent writers to the same assessment.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from coding_assessment.errors import AssessmentNotFoundError
from coding_assessment.models.assessment import CodingAssessment, new_id, utc_now

logger = logging.getLogger(__name__)


class AssessmentStore(ABC):
    """Storage interface for coding assessments."""

    @abstractmethod
    async def get(self, user_id: str, assessment_id: str) -> CodingAssessment | None:
        """Get an assessment, or None if absent."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[CodingAssessment]:
        """All of a user's assessments, newest first."""

    @abstractmethod
    async def create(self, assessment: CodingAssessment) -> str:
        """Persist a new assessment and return its id."""

    @abstractmethod
    async def update(
        self,
        user_id: str,
        assessment_id: str,
        patch: dict[str, Any],
    ) -> CodingAssessment:
        """
        Apply a field patch and return the updated assessment.

        Raises:
            AssessmentNotFoundError: No such assessment
        """


class InMemoryAssessmentStore(AssessmentStore):
    """Process-local store (in-memory for now, a database for production)."""

    def __init__(self):
        self._assessments: dict[tuple[str, str], CodingAssessment] = {}

    async def get(self, user_id: str, assessment_id: str) -> CodingAssessment | None:
        assessment = self._assessments.get((user_id, assessment_id))
        return assessment.model_copy(deep=True) if assessment else None

    async def list_for_user(self, user_id: str) -> list[CodingAssessment]:
        owned = [
            a.model_copy(deep=True)
            for (owner, _), a in self._assessments.items()
            if owner == user_id
        ]
        return sorted(owned, key=lambda a: a.created_at, reverse=True)

    async def create(self, assessment: CodingAssessment) -> str:
        if not assessment.user_id:
            raise ValueError("Assessment must have an owner before it is stored")

        stored = assessment.model_copy(deep=True)
        if not stored.id or (stored.user_id, stored.id) in self._assessments:
            stored.id = new_id()
        now = utc_now()
        stored.created_at = now
        stored.updated_at = now

        self._assessments[(stored.user_id, stored.id)] = stored
        logger.info(f"Stored assessment {stored.id} for user {stored.user_id}")
        return stored.id

    async def update(
        self,
        user_id: str,
        assessment_id: str,
        patch: dict[str, Any],
    ) -> CodingAssessment:
        current = self._assessments.get((user_id, assessment_id))
        if current is None:
            raise AssessmentNotFoundError("Assessment not found")

        data = current.model_dump()
        data.update(patch)
        data["id"] = assessment_id
        data["user_id"] = user_id
        data["updated_at"] = utc_now()

        updated = CodingAssessment.model_validate(data)
        self._assessments[(user_id, assessment_id)] = updated
        logger.info(f"Updated assessment {assessment_id} for user {user_id}")
        return updated.model_copy(deep=True)
