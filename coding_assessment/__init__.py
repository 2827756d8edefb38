"""
Coding Assessment Service - resume-tailored coding questions and AI review

Generates language-agnostic coding questions from a candidate's resume,
collects answers, and produces scored reviews, degrading to synthetic
content when the upstream text-generation service is unavailable.
"""

__version__ = "0.1.0"
__author__ = "Coding Assessment Team"
