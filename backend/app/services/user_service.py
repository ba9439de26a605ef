"""
User profile synchronization from verified Firebase identities.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.utils import utcnow
from app.models.user import User, UserRole
from app.schemas.user import IdentityClaims

logger = logging.getLogger(__name__)


def _apply_login(user: User, identity: IdentityClaims):
    user.name = identity.name or "N/A"
    user.photo_url = identity.picture
    user.last_login = utcnow()


def sync_user_profile(identity: IdentityClaims, db: Session) -> Optional[User]:
    """
    Create or refresh the local profile for an identity, keyed by email.
    Identities without an email are not stored.
    """
    if not identity.email:
        return None

    user = db.query(User).filter(User.email == identity.email).first()
    if user is None:
        user = User(
            firebase_uid=identity.uid,
            email=identity.email,
            role=UserRole.STUDENT,
        )
        _apply_login(user, identity)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Another request inserted the same email first
            db.rollback()
            user = db.query(User).filter(User.email == identity.email).one()
            _apply_login(user, identity)
            db.commit()
        else:
            logger.info(f"Created user profile for {identity.email}")
    else:
        _apply_login(user, identity)
        db.commit()

    db.refresh(user)
    return user


def get_user_by_email(email: Optional[str], db: Session) -> Optional[User]:
    if not email:
        return None
    return db.query(User).filter(User.email == email).first()
