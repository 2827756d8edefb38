"""
API layer for the coding assessment service

Contains FastAPI routers for:
- Assessment generation
- Answer submission and review
- Assessment retrieval
"""

from coding_assessment.api.router import api_router

__all__ = ["api_router"]
