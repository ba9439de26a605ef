"""
Authentication dependencies shared by the protected routes.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import handle_store_errors
from app.core.security import FirebaseTokenVerifier, extract_bearer_token
from app.db.session import get_db
from app.schemas.user import IdentityClaims
from app.services.user_service import sync_user_profile


@lru_cache
def get_identity_verifier() -> FirebaseTokenVerifier:
    """Dependency returning the process-wide Firebase token verifier."""
    return FirebaseTokenVerifier(
        project_id=settings.FIREBASE_PROJECT_ID,
        jwks_url=settings.FIREBASE_JWKS_URL,
    )


def get_current_identity(
    authorization: Optional[str] = Header(None),
    verifier: FirebaseTokenVerifier = Depends(get_identity_verifier),
) -> IdentityClaims:
    """Verify the bearer token and return the caller's identity."""
    token = extract_bearer_token(authorization)
    return verifier.verify(token)


def get_current_user(
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> IdentityClaims:
    """Verify the caller and refresh their local user profile."""
    with handle_store_errors("Failed to synchronize user profile.", db):
        sync_user_profile(identity, db)
    return identity
