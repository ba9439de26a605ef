"""
Platform statistics computed from the current data.
"""
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from app.models.tutorial import Tutorial
from app.models.user import User
from app.schemas.stats import PlatformStats


def get_platform_stats(db: Session) -> PlatformStats:
    """Count users, distinct tutors and language values, and total reviews."""
    users = db.query(func.count(User.id)).scalar()
    reviews, tutors, languages = db.query(
        func.coalesce(func.sum(Tutorial.review_count), 0),
        func.count(distinct(Tutorial.tutor_firebase_uid)),
        func.count(distinct(Tutorial.language)),
    ).one()

    return PlatformStats(
        users=int(users or 0),
        tutors=int(tutors or 0),
        languages=int(languages or 0),
        reviews=int(reviews or 0),
    )
