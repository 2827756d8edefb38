"""
Resume artifact storage.

References are either ``http(s)://`` URLs, fetched with httpx, or paths
relative to the configured resume directory.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from coding_assessment.errors import ArtifactFetchError

logger = logging.getLogger(__name__)


class ArtifactStorage:
    """Fetches stored resume bytes."""

    def __init__(
        self,
        base_dir: str | Path,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_dir = Path(base_dir).resolve()
        self.client = http_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def close(self):
        """Clean up resources."""
        await self.client.aclose()

    async def fetch(self, ref: str) -> bytes:
        """
        Fetch an artifact's bytes.

        Raises:
            ArtifactFetchError: On any I/O failure
        """
        if ref.startswith(("http://", "https://")):
            return await self._fetch_remote(ref)
        return await self._fetch_local(ref)

    async def _fetch_remote(self, url: str) -> bytes:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error downloading resume {url}: {e}")
            raise ArtifactFetchError(f"Failed to download resume: {e}") from e
        return response.content

    async def _fetch_local(self, ref: str) -> bytes:
        path = (self.base_dir / ref).resolve()
        if not path.is_relative_to(self.base_dir):
            raise ArtifactFetchError(f"Resume reference outside storage directory: {ref}")
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Error reading resume {path}: {e}")
            raise ArtifactFetchError(f"Failed to read resume: {e}") from e
