"""
Booking service for booking creation and the student's booking list.
"""
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.errors import InvalidInput, NotFound
from app.core.utils import is_valid_id, utcnow
from app.models.booking import Booking, BookingStatus
from app.models.tutorial import Tutorial
from app.schemas.booking import BookedTutorialInfo, BookingCreate, BookingResponse
from app.schemas.user import IdentityClaims


def create_booking(data: BookingCreate, identity: IdentityClaims, db: Session) -> Tuple[Booking, Tutorial]:
    """
    Book a tutorial for the caller. Price, image, language and the tutor's
    identity are copied from the tutorial as it is now.
    """
    if not data.tutorial_id or not is_valid_id(data.tutorial_id):
        raise InvalidInput("Valid tutorialId is required.")

    tutorial = db.get(Tutorial, data.tutorial_id)
    if tutorial is None:
        raise NotFound("Cannot book a tutorial that does not exist.")

    booking = Booking(
        tutorial_id=tutorial.id,
        student_firebase_uid=identity.uid,
        student_email=identity.email,
        tutor_firebase_uid=tutorial.tutor_firebase_uid,
        tutor_email=tutorial.tutor_email,
        image=tutorial.image,
        language=tutorial.language,
        price=tutorial.price,
        booking_date=utcnow(),
        status=BookingStatus.BOOKED,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking, tutorial


def list_bookings_for_student(student_uid: str, db: Session) -> List[Tuple[Booking, Optional[Tutorial]]]:
    """
    List a student's bookings newest-first, each paired with its tutorial,
    or None when the tutorial no longer exists.
    """
    return db.query(Booking, Tutorial).outerjoin(
        Tutorial, Booking.tutorial_id == Tutorial.id
    ).filter(
        Booking.student_firebase_uid == student_uid
    ).order_by(Booking.booking_date.desc()).all()


def build_booking_response(booking: Booking, tutorial: Optional[Tutorial]) -> BookingResponse:
    """Build a booking response with the joined tutorial fields."""
    response = BookingResponse.model_validate(booking)
    if tutorial is not None:
        response.tutorial = BookedTutorialInfo.model_validate(tutorial)
    return response
