"""
Language category reference data.
"""
from sqlalchemy import Column, String, Text

from app.db.base import BaseModel


class Category(BaseModel):
    """A language category shown on the home page."""
    __tablename__ = "categories"

    name = Column(String(100), unique=True, nullable=False, index=True)
    logo = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
