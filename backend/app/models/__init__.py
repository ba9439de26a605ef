"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User, UserRole
from app.models.tutorial import Tutorial
from app.models.booking import Booking, BookingStatus
from app.models.category import Category

__all__ = [
    "User",
    "UserRole",
    "Tutorial",
    "Booking",
    "BookingStatus",
    "Category",
]
