"""
AI prompt templates for the coding assessment pipeline

Contains structured prompts for:
- Question generation
- Answer review
"""

from coding_assessment.prompts.generation import GenerationPrompts
from coding_assessment.prompts.review import ReviewPrompts

__all__ = [
    "GenerationPrompts",
    "ReviewPrompts",
]
