"""
Tutorial listing and management routes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user
from app.core.errors import handle_store_errors
from app.db.session import get_db
from app.schemas.tutorial import (
    TutorialCreate, TutorialDeleteResponse, TutorialEnvelope,
    TutorialListResponse, TutorialResponse, TutorialUpdate,
)
from app.schemas.user import IdentityClaims
from app.services import tutorial_service

router = APIRouter(tags=["tutorials"])


@router.get("/tutorials", response_model=TutorialListResponse)
def list_tutorials(
    search: Optional[str] = Query(None),
    language: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List tutorials, optionally by free-text search or exact language."""
    with handle_store_errors("Failed to fetch tutorials.", db):
        tutorials = tutorial_service.list_tutorials(db, search=search, language=language, category=category)
    return {
        "success": True,
        "tutorials": [TutorialResponse.model_validate(t) for t in tutorials],
    }


@router.get("/my-tutorials", response_model=TutorialListResponse)
def list_my_tutorials(
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's own tutorials."""
    with handle_store_errors("Failed to fetch your tutorials.", db):
        tutorials = tutorial_service.list_tutorials_for_owner(current_user.uid, db)
    return {
        "success": True,
        "tutorials": [TutorialResponse.model_validate(t) for t in tutorials],
    }


@router.get("/tutorials/{tutorial_id}", response_model=TutorialEnvelope)
def get_tutorial(tutorial_id: str, db: Session = Depends(get_db)):
    """Get tutorial details."""
    with handle_store_errors("Failed to fetch tutorial details.", db):
        tutorial = tutorial_service.get_tutorial(tutorial_id, db)
    return {"success": True, "tutorial": TutorialResponse.model_validate(tutorial)}


@router.post("/tutorials", response_model=TutorialEnvelope, status_code=status.HTTP_201_CREATED)
def create_tutorial(
    tutorial_data: TutorialCreate,
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a tutorial owned by the caller."""
    with handle_store_errors("Failed to add tutorial.", db):
        tutorial = tutorial_service.create_tutorial(tutorial_data, current_user, db)
    return {
        "success": True,
        "message": "Tutorial added!",
        "tutorial": TutorialResponse.model_validate(tutorial),
    }


@router.put("/tutorials/{tutorial_id}", response_model=TutorialEnvelope)
def update_tutorial(
    tutorial_id: str,
    tutorial_data: TutorialUpdate,
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a tutorial; only its owner may do so."""
    with handle_store_errors("Failed to update tutorial.", db):
        tutorial = tutorial_service.update_tutorial(tutorial_id, tutorial_data, current_user.uid, db)
    return {
        "success": True,
        "message": "Tutorial updated successfully.",
        "tutorial": TutorialResponse.model_validate(tutorial),
    }


@router.delete("/tutorials/{tutorial_id}", response_model=TutorialDeleteResponse)
def delete_tutorial(
    tutorial_id: str,
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a tutorial and all of its bookings; only its owner may do so."""
    with handle_store_errors("Failed to delete the tutorial and its related data.", db):
        deleted_tutorials, deleted_bookings = tutorial_service.delete_tutorial(
            tutorial_id, current_user.uid, db
        )
    return {
        "success": True,
        "message": "Tutorial and all associated bookings were deleted successfully.",
        "deleted_tutorials_count": deleted_tutorials,
        "deleted_bookings_count": deleted_bookings,
    }


@router.patch("/tutorials/{tutorial_id}/review", response_model=TutorialEnvelope)
def review_tutorial(
    tutorial_id: str,
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Count one review for a tutorial."""
    with handle_store_errors("Failed to update review count.", db):
        tutorial = tutorial_service.increment_review_count(tutorial_id, db)
    return {
        "success": True,
        "message": "Review count updated successfully.",
        "tutorial": TutorialResponse.model_validate(tutorial),
    }
