"""
Response repair cascade.

Turns free text that is meant to be JSON into structured data. Tiers are
tried in order and the first success wins:

1. DIRECT           - parse the text (fences and surrounding prose stripped)
2. PATTERN_REPAIRED - rewrite known malformation signatures, parse again
3. FIELD_EXTRACTED  - regex-scan individual fields out of the text
4. SYNTHESIZED      - fixed generic question set

Question sets go through all four tiers and never raise. Reviews are flat
objects and only get tiers 1-2; an unparseable review yields ``None`` and the
caller decides what to substitute.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from coding_assessment.models.assessment import (
    Difficulty,
    ParsedQuestion,
    ParsedQuestionSet,
    ParsedReview,
)

logger = logging.getLogger(__name__)


class RepairTier(str, Enum):
    """Which cascade tier produced a value."""

    DIRECT = "direct"
    PATTERN_REPAIRED = "pattern_repaired"
    FIELD_EXTRACTED = "field_extracted"
    SYNTHESIZED = "synthesized"


@dataclass(frozen=True)
class QuestionSetRepair:
    tier: RepairTier
    value: ParsedQuestionSet

    @property
    def degraded(self) -> bool:
        return self.tier == RepairTier.SYNTHESIZED


@dataclass(frozen=True)
class ReviewRepair:
    tier: RepairTier
    value: ParsedReview


DEFAULT_TITLE = "Coding Assessment"
DEFAULT_DESCRIPTION = "Coding assessment based on your resume"

SYNTHESIZED_QUESTION_SET = ParsedQuestionSet(
    title="Coding Assessment",
    description="This assessment had parsing issues but we created basic questions",
    questions=[
        ParsedQuestion(
            id="q1",
            question="Parse a JSON string and handle potential errors",
            difficulty=Difficulty.MEDIUM,
            category="Error Handling",
            expected_output="Function should return a valid object or throw a helpful error",
        ),
        ParsedQuestion(
            id="q2",
            question="Create a function that validates user input for a form",
            difficulty=Difficulty.EASY,
            category="Input Validation",
            expected_output="Function should return true for valid input and false for invalid input",
        ),
        ParsedQuestion(
            id="q3",
            question="Implement a basic caching mechanism for API responses",
            difficulty=Difficulty.MEDIUM,
            category="Performance",
            expected_output=(
                "Function should return cached response if available, "
                "otherwise fetch and cache new response"
            ),
        ),
    ],
)

# A JSON string literal; matched first so structural rewrites skip string contents
_LITERAL = r'"(?:[^"\\]|\\.)*"'


def _outside_strings(replacement: str):
    def _replace(match: re.Match) -> str:
        if match.group(0).startswith('"'):
            return match.group(0)
        return match.expand(replacement)
    return _replace


# Fixed malformation signatures, applied in order
_PATTERN_FIXES: list[tuple[re.Pattern, Any]] = [
    # "id": "q4": "Implement...  ->  "id": "q4", "question": "Implement...
    (re.compile(r'("id"\s*:\s*"[^"]*")\s*:\s*"'), r'\1, "question": "'),
    # Trailing commas
    (re.compile(_LITERAL + r"|,\s*([}\]])"), _outside_strings(r"\1")),
    # } {  ->  }, {
    (re.compile(_LITERAL + r"|}\s*{"), _outside_strings("}, {")),
]

# A JSON string body, escapes included
_STR = r'"((?:[^"\\]|\\.)*)"'

_TITLE_RE = re.compile(r'"title"\s*:\s*' + _STR)
_DESCRIPTION_RE = re.compile(r'"description"\s*:\s*' + _STR)
_QUESTION_RE = re.compile(
    r'"id"\s*:\s*' + _STR + r'\s*[,:]?\s*'
    r'(?:"question"\s*:\s*)?' + _STR + r'\s*,\s*'
    r'"difficulty"\s*:\s*' + _STR + r'\s*,\s*'
    r'"category"\s*:\s*' + _STR +
    r'(?:\s*,\s*"expectedOutput"\s*:\s*' + _STR + r')?'
)


# =============================================================================
# PUBLIC API
# =============================================================================

def repair_question_set(raw: str | None) -> QuestionSetRepair:
    """
    Recover a question set from upstream text. Never raises.

    Args:
        raw: Raw upstream response text

    Returns:
        The recovered set, tagged with the tier that produced it
    """
    raw = raw or ""

    data = _parse_json_object(raw)
    value = _to_question_set(data)
    if value is not None:
        return QuestionSetRepair(RepairTier.DIRECT, value)

    logger.info("Direct parse failed, applying pattern repairs")
    data = _parse_json_object(apply_pattern_fixes(raw))
    value = _to_question_set(data)
    if value is not None:
        return QuestionSetRepair(RepairTier.PATTERN_REPAIRED, value)

    logger.info("Pattern repair failed, extracting fields")
    value = extract_question_fields(raw)
    if value is not None:
        return QuestionSetRepair(RepairTier.FIELD_EXTRACTED, value)

    logger.warning(
        f"All parsing attempts failed, synthesizing generic questions. "
        f"Raw response (first 500 chars): {raw[:500]!r}"
    )
    return QuestionSetRepair(
        RepairTier.SYNTHESIZED,
        SYNTHESIZED_QUESTION_SET.model_copy(deep=True),
    )


def repair_review(raw: str | None) -> ReviewRepair | None:
    """
    Recover a review object from upstream text.

    Returns:
        The recovered review, or None if tiers 1-2 both fail
    """
    raw = raw or ""

    value = _to_review(_parse_json_object(raw))
    if value is not None:
        return ReviewRepair(RepairTier.DIRECT, value)

    value = _to_review(_parse_json_object(apply_pattern_fixes(raw)))
    if value is not None:
        return ReviewRepair(RepairTier.PATTERN_REPAIRED, value)

    logger.warning(f"Unparseable review response (first 500 chars): {raw[:500]!r}")
    return None


# =============================================================================
# TIER HELPERS
# =============================================================================

def strip_markdown_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block."""
    result = text.strip()
    if result.startswith("```json"):
        result = result[7:]
    elif result.startswith("```"):
        result = result[3:]
    if result.endswith("```"):
        result = result[:-3]
    return result.strip()


def _parse_json_object(text: str) -> dict[str, Any] | None:
    text = strip_markdown_fences(text)
    json_start = text.find("{")
    json_end = text.rfind("}") + 1
    if json_start < 0 or json_end <= json_start:
        return None
    try:
        data = json.loads(text[json_start:json_end])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def apply_pattern_fixes(text: str) -> str:
    """Apply the fixed malformation rewrites."""
    for pattern, replacement in _PATTERN_FIXES:
        text = pattern.sub(replacement, text)
    return text


def _unescape(value: str) -> str:
    return value.replace("\\n", "\n").replace('\\"', '"')


def extract_question_fields(raw: str) -> ParsedQuestionSet | None:
    """Field-scan extraction; None when no question tuple is found."""
    questions = []
    for match in _QUESTION_RE.finditer(raw):
        qid, text, difficulty, category, expected = match.groups()
        question = _normalize_question({
            "id": _unescape(qid),
            "question": _unescape(text),
            "difficulty": difficulty,
            "category": _unescape(category),
            "expectedOutput": _unescape(expected) if expected is not None else None,
        })
        if question is not None:
            questions.append(question)

    if not questions:
        return None

    title_match = _TITLE_RE.search(raw)
    desc_match = _DESCRIPTION_RE.search(raw)
    return ParsedQuestionSet(
        title=_unescape(title_match.group(1)) if title_match else DEFAULT_TITLE,
        description=_unescape(desc_match.group(1)) if desc_match else DEFAULT_DESCRIPTION,
        questions=questions,
    )


# =============================================================================
# NORMALIZATION
# =============================================================================

def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


def _normalize_difficulty(value: Any) -> Difficulty:
    try:
        return Difficulty(_as_text(value).lower())
    except ValueError:
        return Difficulty.MEDIUM


def _normalize_question(item: Any) -> ParsedQuestion | None:
    if not isinstance(item, dict):
        return None
    text = _as_text(item.get("question"))
    if not text:
        return None
    expected = _as_text(item.get("expectedOutput", item.get("expected_output")))
    return ParsedQuestion(
        id=_as_text(item.get("id")) or None,
        question=text,
        difficulty=_normalize_difficulty(item.get("difficulty")),
        category=_as_text(item.get("category")) or "general",
        expected_output=expected or None,
    )


def _to_question_set(data: dict[str, Any] | None) -> ParsedQuestionSet | None:
    if data is None or not isinstance(data.get("questions"), list):
        return None
    questions = [
        q for q in (_normalize_question(item) for item in data["questions"])
        if q is not None
    ]
    if not questions:
        return None
    return ParsedQuestionSet(
        title=_as_text(data.get("title")) or DEFAULT_TITLE,
        description=_as_text(data.get("description")) or DEFAULT_DESCRIPTION,
        questions=questions,
    )


def _score(value: Any) -> int:
    score = int(float(value))
    return max(0, min(100, score))


def _to_review(data: dict[str, Any] | None) -> ParsedReview | None:
    if data is None:
        return None
    try:
        correctness = _score(data["correctness"])
        efficiency = _score(data["efficiency"])
        readability = _score(data["readability"])
        if data.get("overallScore") is not None:
            overall = _score(data["overallScore"])
        else:
            overall = (correctness + efficiency + readability) // 3

        feedback = _as_text(data["feedback"])
        if not feedback:
            return None

        improvements = data.get("improvements") or []
        if isinstance(improvements, str):
            improvements = [improvements]
        if not isinstance(improvements, list):
            return None

        return ParsedReview(
            correctness=correctness,
            efficiency=efficiency,
            readability=readability,
            overall_score=overall,
            feedback=feedback,
            improvements=[_as_text(i) for i in improvements if _as_text(i)],
        )
    except (KeyError, TypeError, ValueError, OverflowError, ValidationError) as e:
        logger.debug(f"Review payload rejected: {e}")
        return None
