"""
Firebase ID token verification and ownership checks.
"""
import logging
import re
import threading
import time
from typing import Any, Optional, Sequence

import httpx
from jose import ExpiredSignatureError, JWTError, jwt

from app.core.errors import InvalidCredential, TokenExpired, Unauthenticated
from app.schemas.user import IdentityClaims

logger = logging.getLogger(__name__)

ISSUER_PREFIX = "https://securetoken.google.com/"
DEFAULT_KEY_CACHE_SECONDS = 3600

_MAX_AGE_PATTERN = re.compile(r"max-age=(\d+)")


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise Unauthenticated()
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise Unauthenticated()
    return token


def is_owner(caller_uid: str, record: Any) -> bool:
    """Check whether the caller owns a tutorial-like record."""
    owner_uid = getattr(record, "tutor_firebase_uid", None)
    return bool(caller_uid) and owner_uid == caller_uid


class FirebaseTokenVerifier:
    """
    Verifies Firebase ID tokens.

    Signing keys come from Google's JWKS endpoint and are cached for the
    lifetime advertised in its Cache-Control header. A static `key` (and
    matching `algorithms`) replaces the remote key set, which is how tests
    sign tokens locally.
    """

    def __init__(
        self,
        project_id: str,
        jwks_url: Optional[str] = None,
        key: Optional[Any] = None,
        algorithms: Sequence[str] = ("RS256",),
        timeout: float = 10.0,
    ):
        if key is None and not jwks_url:
            raise ValueError("Either jwks_url or key is required")
        self.project_id = project_id
        self.issuer = f"{ISSUER_PREFIX}{project_id}"
        self.jwks_url = jwks_url
        self.algorithms = list(algorithms)
        self.timeout = timeout
        self._static_key = key
        self._jwks: Optional[dict] = None
        self._jwks_expires_at = 0.0
        self._jwks_lock = threading.Lock()

    def _signing_keys(self) -> Any:
        if self._static_key is not None:
            return self._static_key

        with self._jwks_lock:
            now = time.monotonic()
            if self._jwks is None or now >= self._jwks_expires_at:
                response = httpx.get(self.jwks_url, timeout=self.timeout)
                response.raise_for_status()
                self._jwks = response.json()
                max_age = _MAX_AGE_PATTERN.search(response.headers.get("cache-control", ""))
                ttl = int(max_age.group(1)) if max_age else DEFAULT_KEY_CACHE_SECONDS
                self._jwks_expires_at = now + ttl
                logger.info(f"Fetched Firebase signing keys (cached for {ttl}s)")
            return self._jwks

    def verify(self, token: str) -> IdentityClaims:
        """Verify a token and return the caller's identity claims."""
        try:
            keys = self._signing_keys()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Could not load Firebase signing keys: {exc}")
            raise InvalidCredential("Unauthorized: Unable to verify token.") from exc

        try:
            payload = jwt.decode(
                token,
                keys,
                algorithms=self.algorithms,
                audience=self.project_id,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as exc:
            logger.warning("Firebase ID token rejected: expired")
            raise TokenExpired() from exc
        except JWTError as exc:
            logger.warning(f"Firebase ID token rejected: {exc.__class__.__name__}: {exc}")
            raise InvalidCredential(f"Unauthorized: {exc}") from exc

        uid = payload.get("sub")
        if not uid or not isinstance(uid, str):
            logger.warning("Firebase ID token rejected: missing subject")
            raise InvalidCredential("Unauthorized: Token has no subject.")

        return IdentityClaims(
            uid=uid,
            email=payload.get("email"),
            name=payload.get("name"),
            picture=payload.get("picture"),
        )
