"""
Pydantic schemas for platform statistics.
"""
from pydantic import BaseModel

from app.schemas.common import SuccessResponse


class PlatformStats(BaseModel):
    """Platform-wide counts; every field is always an integer."""
    users: int = 0
    tutors: int = 0
    languages: int = 0
    reviews: int = 0


class StatsResponse(SuccessResponse):
    stats: PlatformStats
