"""
Tutorial service for listing, ownership-checked mutation and review counting.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, InvalidInput, NotFound
from app.core.security import is_owner
from app.core.utils import is_valid_id, utcnow
from app.models.booking import Booking
from app.models.tutorial import Tutorial
from app.schemas.tutorial import TutorialCreate, TutorialUpdate
from app.schemas.user import IdentityClaims

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("language", "description", "image")


def list_tutorials(
    db: Session,
    search: Optional[str] = None,
    language: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Tutorial]:
    """
    List tutorials newest-first.

    `search` is a case-insensitive substring match on language, description
    or tutor name. Otherwise `language`, then `category`, is a
    case-insensitive exact match on language.
    """
    query = db.query(Tutorial)
    if search:
        term = search.lower()
        query = query.filter(or_(
            func.lower(Tutorial.language).contains(term, autoescape=True),
            func.lower(Tutorial.description).contains(term, autoescape=True),
            func.lower(Tutorial.tutor_name).contains(term, autoescape=True),
        ))
    elif language or category:
        query = query.filter(func.lower(Tutorial.language) == (language or category).lower())
    return query.order_by(Tutorial.created_at.desc()).all()


def list_tutorials_for_owner(owner_uid: str, db: Session) -> List[Tutorial]:
    return db.query(Tutorial).filter(
        Tutorial.tutor_firebase_uid == owner_uid
    ).order_by(Tutorial.created_at.desc()).all()


def get_tutorial(tutorial_id: str, db: Session) -> Tutorial:
    """Get a tutorial by id; malformed ids are treated as not found."""
    tutorial = None
    if is_valid_id(tutorial_id):
        tutorial = db.get(Tutorial, tutorial_id)
    if tutorial is None:
        raise NotFound("Tutorial not found.")
    return tutorial


def _check_required(values: dict):
    for field in REQUIRED_FIELDS:
        if field in values and not (values[field] or "").strip():
            raise InvalidInput("Missing required tutorial fields or invalid price.")
    price = values.get("price")
    if price is not None and price < 0:
        raise InvalidInput("Price cannot be negative.")


def create_tutorial(data: TutorialCreate, identity: IdentityClaims, db: Session) -> Tutorial:
    """Create a tutorial owned by the caller."""
    values = {
        "image": data.image,
        "language": data.language,
        "description": data.description,
        "price": data.price if data.price is not None else 0,
    }
    if any(not values[field] for field in REQUIRED_FIELDS):
        raise InvalidInput("Missing required tutorial fields or invalid price.")
    _check_required(values)

    now = utcnow()
    tutorial = Tutorial(
        tutor_firebase_uid=identity.uid,
        tutor_email=identity.email,
        tutor_name=identity.name or data.tutor_name or "Tutor",
        tutor_photo_url=identity.picture or data.tutor_photo_url,
        image=values["image"].strip(),
        language=values["language"].strip(),
        price=values["price"],
        description=values["description"].strip(),
        review_count=0,
        created_at=now,
        updated_at=now,
    )
    db.add(tutorial)
    db.commit()
    db.refresh(tutorial)
    return tutorial


def _get_owned_tutorial(tutorial_id: str, caller_uid: str, db: Session) -> Tutorial:
    tutorial = get_tutorial(tutorial_id, db)
    if not is_owner(caller_uid, tutorial):
        raise Forbidden("Forbidden: You can only modify your own tutorials.")
    return tutorial


def update_tutorial(
    tutorial_id: str,
    data: TutorialUpdate,
    caller_uid: str,
    db: Session,
) -> Tutorial:
    """Apply the editable fields of `data` to a tutorial the caller owns."""
    _get_owned_tutorial(tutorial_id, caller_uid, db)

    values = data.model_dump(exclude_unset=True, by_alias=False)
    values = {k: v for k, v in values.items() if v is not None}
    _check_required(values)
    for field in REQUIRED_FIELDS:
        if field in values:
            values[field] = values[field].strip()
    values["updated_at"] = utcnow()

    matched = db.query(Tutorial).filter(
        Tutorial.id == tutorial_id,
        Tutorial.tutor_firebase_uid == caller_uid,
    ).update(values, synchronize_session=False)
    if matched == 0:
        db.rollback()
        raise NotFound("Update failed (tutorial not found or no permission).")
    db.commit()
    return get_tutorial(tutorial_id, db)


def delete_tutorial(tutorial_id: str, caller_uid: str, db: Session) -> Tuple[int, int]:
    """
    Delete a tutorial the caller owns together with every booking of it.
    Both deletes run in one transaction. Returns (tutorials, bookings) counts.
    """
    _get_owned_tutorial(tutorial_id, caller_uid, db)

    deleted_tutorials = db.query(Tutorial).filter(
        Tutorial.id == tutorial_id,
        Tutorial.tutor_firebase_uid == caller_uid,
    ).delete(synchronize_session=False)
    if deleted_tutorials == 0:
        db.rollback()
        raise NotFound("Delete failed, tutorial not found.")

    deleted_bookings = db.query(Booking).filter(
        Booking.tutorial_id == tutorial_id
    ).delete(synchronize_session=False)
    db.commit()

    logger.info(f"Tutorial {tutorial_id} deleted. Associated bookings deleted: {deleted_bookings}")
    return deleted_tutorials, deleted_bookings


def increment_review_count(tutorial_id: str, db: Session) -> Tutorial:
    """Atomically add one to a tutorial's review count."""
    if not is_valid_id(tutorial_id):
        raise NotFound("Tutorial to review not found.")

    matched = db.query(Tutorial).filter(Tutorial.id == tutorial_id).update(
        {Tutorial.review_count: Tutorial.review_count + 1},
        synchronize_session=False,
    )
    if matched == 0:
        db.rollback()
        raise NotFound("Tutorial to review not found.")
    db.commit()
    return get_tutorial(tutorial_id, db)
