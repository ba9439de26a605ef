"""
Language category routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import handle_store_errors
from app.db.session import get_db
from app.schemas.category import CategoryListResponse, CategoryResponse
from app.services.category_service import list_categories

router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=CategoryListResponse)
def get_categories(db: Session = Depends(get_db)):
    """List all language categories."""
    with handle_store_errors("Failed to fetch language categories.", db):
        categories = list_categories(db)
    return {
        "success": True,
        "categories": [CategoryResponse.model_validate(c) for c in categories],
    }
