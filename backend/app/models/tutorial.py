"""
Tutorial model: a tutor's paid lesson listing for one language.
"""
from sqlalchemy import Column, Integer, Numeric, String, Text

from app.db.base import BaseModel


class Tutorial(BaseModel):
    """Tutorial listing owned by the tutor whose Firebase uid it carries."""
    __tablename__ = "tutorials"

    # Owner identity, captured when the listing is created
    tutor_firebase_uid = Column(String(128), nullable=False, index=True)
    tutor_email = Column(String(255), nullable=True)
    tutor_name = Column(String(255), nullable=False, default="Tutor")
    tutor_photo_url = Column(String(1024), nullable=True)

    image = Column(String(1024), nullable=False)
    language = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(Text, nullable=False)
    review_count = Column(Integer, nullable=False, default=0)  # server-maintained only
