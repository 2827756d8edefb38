"""
User profile lookup, limited to what the pipeline needs: the resume reference.
"""

from abc import ABC, abstractmethod


class ProfileStore(ABC):
    """Read access to user profiles."""

    @abstractmethod
    async def get_resume_ref(self, user_id: str) -> str | None:
        """Stored resume reference for a user, if any."""


class InMemoryProfileStore(ProfileStore):
    """Process-local profile store."""

    def __init__(self, resume_refs: dict[str, str] | None = None):
        self._resume_refs: dict[str, str] = dict(resume_refs or {})

    async def get_resume_ref(self, user_id: str) -> str | None:
        return self._resume_refs.get(user_id)

    def set_resume_ref(self, user_id: str, ref: str) -> None:
        self._resume_refs[user_id] = ref
