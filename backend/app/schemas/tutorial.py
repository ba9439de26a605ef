"""
Pydantic schemas for Tutorial entity.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, condecimal

from app.schemas.common import APIModel, SuccessResponse

# Non-negative, finite and within the Numeric(10, 2) column
Price = condecimal(ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)


class TutorialCreate(APIModel):
    """Schema for tutorial creation."""
    image: Optional[str] = None
    language: Optional[str] = None
    price: Optional[Price] = None
    description: Optional[str] = None
    # Fallbacks used only when the token carries no name/picture
    tutor_name: Optional[str] = None
    tutor_photo_url: Optional[str] = Field(default=None, alias="tutorPhotoURL")


class TutorialUpdate(APIModel):
    """
    Schema for tutorial update. Only these fields are editable; owner
    identity, review count and timestamps sent by the client are dropped.
    """
    image: Optional[str] = None
    language: Optional[str] = None
    price: Optional[Price] = None
    description: Optional[str] = None


class TutorialResponse(APIModel):
    """Schema for tutorial response."""
    id: str = Field(alias="_id")
    tutor_firebase_uid: str
    tutor_email: Optional[str] = None
    tutor_name: str
    tutor_photo_url: Optional[str] = Field(default=None, alias="tutorPhotoURL")
    image: str
    language: str
    price: float
    description: str
    review_count: int
    created_at: datetime
    updated_at: datetime


class TutorialEnvelope(SuccessResponse):
    tutorial: TutorialResponse


class TutorialListResponse(SuccessResponse):
    tutorials: List[TutorialResponse] = []


class TutorialDeleteResponse(SuccessResponse):
    deleted_tutorials_count: int
    deleted_bookings_count: int
