"""
User profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user
from app.core.errors import handle_store_errors
from app.db.session import get_db
from app.schemas.user import IdentityClaims, UserEnvelope, UserResponse
from app.services.user_service import get_user_by_email

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope)
def get_current_user_info(
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the caller's synchronized profile."""
    with handle_store_errors("Failed to fetch user profile.", db):
        user = get_user_by_email(current_user.email, db)
    return {
        "success": True,
        "user": UserResponse.model_validate(user) if user else None,
    }
