"""
Booking model for a student's reservation of a tutorial.
"""
import enum

from sqlalchemy import Column, DateTime, Enum as SQLEnum, Numeric, String

from app.core.utils import utcnow
from app.db.base import BaseModel


class BookingStatus(str, enum.Enum):
    """Booking status enumeration."""
    BOOKED = "Booked"


class Booking(BaseModel):
    """
    A booking with price/image/language frozen at booking time.

    tutorial_id is deliberately not a foreign key: bookings are removed
    explicitly when their tutorial is deleted.
    """
    __tablename__ = "bookings"

    tutorial_id = Column(String(32), nullable=False, index=True)
    student_firebase_uid = Column(String(128), nullable=False, index=True)
    student_email = Column(String(255), nullable=True)
    tutor_firebase_uid = Column(String(128), nullable=False)
    tutor_email = Column(String(255), nullable=True)

    # Snapshot of the tutorial at booking time
    image = Column(String(1024), nullable=True)
    language = Column(String(100), nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    booking_date = Column(DateTime, default=utcnow, nullable=False, index=True)
    status = Column(SQLEnum(BookingStatus), default=BookingStatus.BOOKED, nullable=False)
