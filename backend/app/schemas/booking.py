"""
Pydantic schemas for Booking entity.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.booking import BookingStatus
from app.schemas.common import APIModel, SuccessResponse


class BookingCreate(APIModel):
    """
    Schema for booking creation. image/language/price are accepted for
    compatibility but the stored snapshot is taken from the tutorial.
    """
    tutorial_id: Optional[str] = None
    image: Optional[str] = None
    language: Optional[str] = None
    price: Optional[float] = None


class BookedTutorialInfo(APIModel):
    """Tutorial fields joined into a booking at read time."""
    tutor_email: Optional[str] = None
    tutor_name: Optional[str] = None
    image: Optional[str] = None
    language: Optional[str] = None
    description: Optional[str] = None


class BookingResponse(APIModel):
    """Schema for booking response."""
    id: str = Field(alias="_id")
    tutorial_id: str
    student_firebase_uid: str
    student_email: Optional[str] = None
    tutor_firebase_uid: str
    tutor_email: Optional[str] = None
    image: Optional[str] = None
    language: Optional[str] = None
    price: float
    booking_date: datetime
    status: BookingStatus
    tutorial: Optional[BookedTutorialInfo] = None


class BookingEnvelope(SuccessResponse):
    booking: BookingResponse


class BookingListResponse(SuccessResponse):
    bookings: List[BookingResponse] = []
