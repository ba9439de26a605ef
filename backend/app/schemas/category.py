"""
Pydantic schemas for language categories.
"""
from typing import List, Optional

from pydantic import Field

from app.schemas.common import APIModel, SuccessResponse


class CategoryResponse(APIModel):
    id: str = Field(alias="_id")
    name: str
    logo: Optional[str] = None
    description: Optional[str] = None


class CategoryListResponse(SuccessResponse):
    categories: List[CategoryResponse] = []
