"""
Resume text extraction.

Turns a stored resume artifact (or caller-supplied text) into plain printable
ASCII. Too little remaining text is reported as ``insufficient`` rather than
as an error; fetch failures propagate as ArtifactFetchError.
"""

import logging
import re
from dataclasses import dataclass

from coding_assessment.storage.artifact_storage import ArtifactStorage

logger = logging.getLogger(__name__)

# Control characters, keeping \n and \r
_CONTROL_CHARS = re.compile(r"[\x00-\x09\x0B\x0C\x0E-\x1F\x7F-\x9F]")
_NON_ASCII = re.compile(r"[^\x20-\x7E\n]")


@dataclass(frozen=True)
class ExtractionResult:
    text: str | None

    @property
    def insufficient(self) -> bool:
        return self.text is None


def clean_text(text: str) -> str:
    """Strip non-printable and non-ASCII characters."""
    return _NON_ASCII.sub("", _CONTROL_CHARS.sub("", text))


class TextExtractor:
    """Resolves resume artifacts to plain text."""

    def __init__(self, storage: ArtifactStorage, min_chars: int = 100):
        self.storage = storage
        self.min_chars = min_chars

    def from_text(self, text: str) -> ExtractionResult:
        """Clean caller-supplied text."""
        cleaned = clean_text(text)
        if len(cleaned) < self.min_chars:
            logger.warning(
                f"Resume text too short after cleaning ({len(cleaned)} < {self.min_chars} chars)"
            )
            return ExtractionResult(text=None)
        return ExtractionResult(text=cleaned)

    async def from_artifact(self, ref: str) -> ExtractionResult:
        """
        Fetch and clean a stored artifact.

        Raises:
            ArtifactFetchError: The artifact could not be fetched
        """
        logger.info(f"Extracting text from resume: {ref}")
        data = await self.storage.fetch(ref)
        logger.info(f"Downloaded resume file ({len(data)} bytes)")

        result = self.from_text(data.decode("utf-8", errors="ignore"))
        if not result.insufficient:
            logger.info(f"Extracted approximately {len(result.text)} characters from resume")
        return result
