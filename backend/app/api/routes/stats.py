"""
Platform statistics route.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import handle_store_errors
from app.db.session import get_db
from app.schemas.stats import StatsResponse
from app.services.stats_service import get_platform_stats

router = APIRouter(tags=["stats"])


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """Get platform-wide counts."""
    with handle_store_errors("Failed to fetch platform statistics.", db):
        stats = get_platform_stats(db)
    return {"success": True, "stats": stats}
