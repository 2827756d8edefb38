"""
Mock Provider for the coding assessment pipeline

Synthetic question sets and reviews, used for:
- Mock mode (upstream never called)
- Per-unit fallback when a live call fails

Randomness comes from an injectable ``random.Random`` so tests can seed it.
"""

import logging
import random

from coding_assessment.models.assessment import (
    AssessmentStatus,
    CodingAssessment,
    CodingQuestion,
    CodingReview,
    ContentSource,
    Difficulty,
    new_id,
    utc_now,
)

logger = logging.getLogger(__name__)


MOCK_TITLE = "Coding Assessment Based on Resume Analysis"
MOCK_DESCRIPTION = (
    "This assessment is tailored to your experience in web development "
    "with JavaScript, React, and Node.js"
)

# (question, difficulty, category, expected output)
MOCK_QUESTIONS: list[tuple[str, Difficulty, str, str]] = [
    (
        "Write a function that takes an array of integers and returns the two numbers "
        "that add up to a specific target. You may assume that each input would have "
        "exactly one solution, and you may not use the same element twice.\n\n"
        "Example:\nInput: nums = [2, 7, 11, 15], target = 9\n"
        "Output: [0, 1] (because nums[0] + nums[1] = 2 + 7 = 9)",
        Difficulty.EASY,
        "algorithms",
        "Function should return the indices of the two numbers that add up to the target.",
    ),
    (
        "Implement a function that checks if a string is a valid palindrome, considering "
        "only alphanumeric characters and ignoring cases.\n\n"
        "Example:\nInput: 'A man, a plan, a canal: Panama'\nOutput: true",
        Difficulty.EASY,
        "string manipulation",
        "Function should return a boolean indicating whether the input string is a palindrome.",
    ),
    (
        "Implement a debounce function that limits how often a function can be called. "
        "The function should return a new function that can only be called once per "
        "specified time period.\n\n"
        "Example usage: When a user is typing in a search box, you want to limit API "
        "calls to once every 500ms after they stop typing.",
        Difficulty.MEDIUM,
        "function optimization",
        "A debounce function that delays invoking the provided function until after a "
        "specified wait time has elapsed since the last time it was invoked.",
    ),
    (
        "Create a function that performs a deep comparison between two objects to "
        "determine if they are equal. Two objects are considered equal when they have "
        "the same properties, values, and nested objects.\n\n"
        "Example:\nInput: obj1 = {a: 1, b: {c: 2}}, obj2 = {a: 1, b: {c: 2}}\nOutput: true",
        Difficulty.HARD,
        "object comparison",
        "Function should return a boolean indicating whether the two input objects are deeply equal.",
    ),
    (
        "Implement a cache system with a Least Recently Used (LRU) eviction policy. The "
        "cache should have a maximum capacity and remove the least recently used items "
        "when it reaches capacity.\n\n"
        "The cache should support the following operations: get(key), put(key, value), "
        "and should perform both operations in O(1) time complexity.",
        Difficulty.HARD,
        "data structures",
        "An implementation of an LRU cache with get and put methods that operate in O(1) "
        "time complexity.",
    ),
]

GOOD_REMARKS = [
    "Good use of appropriate data structures.",
    "Solution correctly handles the core requirements.",
    "Code is generally well-structured and readable.",
    "Appropriate use of language features.",
    "Solution demonstrates understanding of the problem domain.",
]

BAD_REMARKS = [
    "Solution may have edge cases that aren't handled.",
    "Variable naming could be more descriptive.",
    "Missing comments explaining complex logic.",
    "Some redundant code that could be simplified.",
    "Could improve time/space complexity.",
]

IMPROVEMENT_POOL = [
    "Add input validation to handle edge cases",
    "Consider using more descriptive variable names",
    "Add comments explaining your thought process",
    "Refactor repeated code into helper functions",
    "Consider a more efficient algorithm to improve time complexity",
    "Add unit tests to verify correctness",
    "Use more modern language features where appropriate",
]

SCORE_MIN = 60
SCORE_MAX = 95
IMPROVEMENT_COUNT = 3


class MockProvider:
    """
    Generates schema-valid synthetic assessments and reviews.

    Reviews draw scores uniformly from [SCORE_MIN, SCORE_MAX] and sample
    IMPROVEMENT_COUNT distinct suggestions from IMPROVEMENT_POOL.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def mock_assessment(self, source: ContentSource = ContentSource.MOCK) -> CodingAssessment:
        """Fixed five-question assessment with fresh ids."""
        logger.info("Generating mock coding questions")
        now = utc_now()
        questions = [
            CodingQuestion(
                id=new_id(),
                question=text,
                difficulty=difficulty,
                category=category,
                expected_output=expected,
            )
            for text, difficulty, category, expected in MOCK_QUESTIONS
        ]
        return CodingAssessment(
            id=new_id(),
            title=MOCK_TITLE,
            description=MOCK_DESCRIPTION,
            questions=questions,
            status=AssessmentStatus.NOT_STARTED,
            created_at=now,
            updated_at=now,
            source=source,
            notice=_assessment_notice(source),
        )

    def mock_review(
        self,
        question_id: str,
        source: ContentSource = ContentSource.MOCK,
    ) -> CodingReview:
        """Random-but-bounded review for one question."""
        logger.info(f"Generating mock review for question: {question_id}")

        correctness = self.rng.randint(SCORE_MIN, SCORE_MAX)
        efficiency = self.rng.randint(SCORE_MIN, SCORE_MAX)
        readability = self.rng.randint(SCORE_MIN, SCORE_MAX)
        overall_score = (correctness + efficiency + readability) // 3

        return CodingReview(
            question_id=question_id,
            correctness=correctness,
            efficiency=efficiency,
            readability=readability,
            overall_score=overall_score,
            feedback=self._feedback(correctness, efficiency, overall_score),
            improvements=self.rng.sample(IMPROVEMENT_POOL, IMPROVEMENT_COUNT),
            reviewed_at=utc_now(),
            source=source,
        )

    def _feedback(self, correctness: int, efficiency: int, overall_score: int) -> str:
        """Assemble feedback from score-banded canned phrases."""
        if overall_score > 85:
            parts = ["Your solution is strong overall.", self.rng.choice(GOOD_REMARKS)]
            if correctness < 90:
                parts.append(BAD_REMARKS[0])
            if efficiency < 90:
                parts.append(BAD_REMARKS[4])
        elif overall_score > 70:
            parts = [
                "Your solution is good but has some areas for improvement.",
                self.rng.choice(GOOD_REMARKS),
                self.rng.choice(BAD_REMARKS),
            ]
        else:
            first, second = self.rng.sample(BAD_REMARKS, 2)
            parts = ["Your solution works but needs significant improvements.", first, second]
        return " ".join(parts)


def _assessment_notice(source: ContentSource) -> str | None:
    if source == ContentSource.FALLBACK:
        return "Live question generation was unavailable; a sample assessment was provided instead."
    if source == ContentSource.MOCK:
        return "Sample assessment generated in mock mode."
    return None
