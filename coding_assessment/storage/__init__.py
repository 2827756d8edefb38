"""
Storage collaborators for the coding assessment pipeline

Contains:
- Assessment Store: persisted assessments per user
- Profile Store: resume references on user profiles
- Artifact Storage: stored resume bytes
"""

from coding_assessment.storage.artifact_storage import ArtifactStorage
from coding_assessment.storage.assessment_store import AssessmentStore, InMemoryAssessmentStore
from coding_assessment.storage.profile_store import InMemoryProfileStore, ProfileStore

__all__ = [
    "ArtifactStorage",
    "AssessmentStore",
    "InMemoryAssessmentStore",
    "ProfileStore",
    "InMemoryProfileStore",
]
