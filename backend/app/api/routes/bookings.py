"""
Booking routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user
from app.core.errors import handle_store_errors
from app.db.session import get_db
from app.schemas.booking import BookingCreate, BookingEnvelope, BookingListResponse
from app.schemas.user import IdentityClaims
from app.services import booking_service

router = APIRouter(tags=["bookings"])


@router.post("/bookings", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Book a tutorial for the caller."""
    with handle_store_errors("Failed to create booking.", db):
        booking, tutorial = booking_service.create_booking(booking_data, current_user, db)
    return {
        "success": True,
        "message": "Booking successful!",
        "booking": booking_service.build_booking_response(booking, tutorial),
    }


@router.get("/my-bookings", response_model=BookingListResponse)
def list_my_bookings(
    current_user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's bookings with current tutorial details."""
    with handle_store_errors("Failed to fetch your booked tutorials.", db):
        rows = booking_service.list_bookings_for_student(current_user.uid, db)
    return {
        "success": True,
        "bookings": [
            booking_service.build_booking_response(booking, tutorial)
            for booking, tutorial in rows
        ],
    }
