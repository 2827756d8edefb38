"""
API endpoint modules for the coding assessment service
"""

from coding_assessment.api.endpoints import assessments

__all__ = ["assessments"]
