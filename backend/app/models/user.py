"""
User model, synchronized lazily from Firebase identities.
"""
import enum

from sqlalchemy import Column, DateTime, Enum as SQLEnum, String

from app.db.base import BaseModel


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    TUTOR = "tutor"


class User(BaseModel):
    """Local profile for a Firebase account, keyed by email."""
    __tablename__ = "users"

    firebase_uid = Column(String(128), nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, default="N/A")
    photo_url = Column(String(1024), nullable=True)
    role = Column(SQLEnum(UserRole), default=UserRole.STUDENT, nullable=False)
    last_login = Column(DateTime, nullable=True)
