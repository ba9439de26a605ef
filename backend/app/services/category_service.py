"""
Language category catalog, seeded on first use.
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.category import Category

logger = logging.getLogger(__name__)

# Seed data for the category catalog
LANGUAGE_CATEGORIES = [
    {"name": "Arabic", "logo": "arabic.png", "description": "Read and speak the language of the Quran and 25 countries."},
    {"name": "Bengali", "logo": "bengali.png", "description": "Learn the language of Bangladesh and West Bengal."},
    {"name": "Chinese", "logo": "chinese.png", "description": "Master Mandarin tones, characters and conversation."},
    {"name": "English", "logo": "english.png", "description": "Build fluency in the world's most widely used language."},
    {"name": "French", "logo": "french.png", "description": "From everyday phrases to literature and culture."},
    {"name": "German", "logo": "german.png", "description": "Grammar, pronunciation and conversation practice."},
    {"name": "Italian", "logo": "italian.png", "description": "Speak the language of art, music and food."},
    {"name": "Japanese", "logo": "japanese.png", "description": "Hiragana, katakana, kanji and spoken Japanese."},
    {"name": "Korean", "logo": "korean.png", "description": "Hangul, grammar and conversational Korean."},
    {"name": "Spanish", "logo": "spanish.png", "description": "Conversation and grammar for beginners to advanced."},
]


def seed_categories(db: Session) -> int:
    """Insert the seed categories if the catalog is empty. Returns rows added."""
    if db.query(Category.id).first() is not None:
        return 0

    db.add_all([Category(**category) for category in LANGUAGE_CATEGORIES])
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request seeded first
        db.rollback()
        return 0
    logger.info(f"Seeded {len(LANGUAGE_CATEGORIES)} language categories")
    return len(LANGUAGE_CATEGORIES)


def list_categories(db: Session) -> List[Category]:
    """Return all categories sorted by name, seeding an empty catalog first."""
    seed_categories(db)
    return db.query(Category).order_by(Category.name.asc()).all()
