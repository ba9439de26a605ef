"""
Pydantic schemas for identities and user profiles.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.user import UserRole
from app.schemas.common import APIModel, SuccessResponse


class IdentityClaims(BaseModel):
    """Claims extracted from a verified Firebase ID token."""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


class UserResponse(APIModel):
    """Schema for user response."""
    id: str = Field(alias="_id")
    firebase_uid: str
    email: str
    name: str
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    role: UserRole
    created_at: datetime
    last_login: Optional[datetime] = None


class UserEnvelope(SuccessResponse):
    user: Optional[UserResponse] = None
