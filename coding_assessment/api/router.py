"""
Main API router for the coding assessment service

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from coding_assessment.api.endpoints import assessments

api_router = APIRouter()

api_router.include_router(
    assessments.router,
    prefix="/assessments",
    tags=["Assessments"]
)
