"""
Tests for token verification, profile sync and settings.
"""
import base64
import json
import threading
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import httpx
import pytest
from pydantic import ValidationError
from sqlalchemy import event

from app.core.config import Settings, decode_service_key
from app.core.errors import Unauthenticated
from app.core.security import FirebaseTokenVerifier, extract_bearer_token, is_owner
from app.db.session import Database
from app.models.user import User, UserRole
from app.schemas.user import IdentityClaims
from app.services.user_service import sync_user_profile


def test_missing_authorization_header(client):
    """Test request without a token."""
    response = client.get("/my-bookings")
    assert response.status_code == 401
    assert response.json()["success"] is False
    assert "No token" in response.json()["message"]


def test_malformed_authorization_header(client, issue_token):
    """Test header without the Bearer scheme."""
    token = issue_token("uid-alice", email="alice@example.com")
    response = client.get("/my-bookings", headers={"Authorization": f"Token {token}"})
    assert response.status_code == 401


def test_expired_token(client, issue_token):
    """Test that an expired token is rejected with 401."""
    token = issue_token("uid-alice", email="alice@example.com", expires_in=-60)
    response = client.get("/my-bookings", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert "expired" in response.json()["message"]


def test_bad_signature(client, issue_token):
    """Test that a token signed with another key is rejected with 403."""
    token = issue_token("uid-alice", key="some-other-key-that-is-also-32-characters-long")
    response = client.get("/my-bookings", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["success"] is False


def test_wrong_audience(client, issue_token):
    """Test that a token for another Firebase project is rejected with 403."""
    token = issue_token("uid-alice", project_id="another-project")
    response = client.get("/my-bookings", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_profile_synced_on_authenticated_request(client, auth_headers, db_session):
    """Test that the first authenticated request creates the user profile."""
    headers = auth_headers("uid-carol", email="carol@example.com", name="Carol", picture="http://p/c.png")
    response = client.get("/users/me", headers=headers)
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["email"] == "carol@example.com"
    assert user["firebaseUid"] == "uid-carol"
    assert user["name"] == "Carol"
    assert user["photoURL"] == "http://p/c.png"
    assert user["role"] == "student"
    assert user["lastLogin"] is not None


def test_profile_upsert_keyed_by_email(client, auth_headers, db_session):
    """Test that repeated requests refresh, not duplicate, the profile."""
    client.get("/my-bookings", headers=auth_headers("uid-carol", email="carol@example.com", name="Carol"))
    client.get("/my-bookings", headers=auth_headers("uid-carol", email="carol@example.com", name="Carol B."))

    users = db_session.query(User).filter(User.email == "carol@example.com").all()
    assert len(users) == 1
    assert users[0].name == "Carol B."
    assert users[0].role == UserRole.STUDENT


def test_identity_without_email_is_not_stored(client, auth_headers, db_session):
    """Test that tokens without an email still authenticate but store no profile."""
    response = client.get("/users/me", headers=auth_headers("uid-anon"))
    assert response.status_code == 200
    assert response.json()["user"] is None
    assert db_session.query(User).count() == 0


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    for header in (None, "", "Bearer ", "Basic abc", "bearer abc"):
        with pytest.raises(Unauthenticated):
            extract_bearer_token(header)


def test_is_owner():
    record = SimpleNamespace(tutor_firebase_uid="uid-alice")
    assert is_owner("uid-alice", record)
    assert not is_owner("uid-bob", record)
    assert not is_owner("", SimpleNamespace(tutor_firebase_uid=""))


def _service_key(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode()).decode()


def test_settings_project_id_from_service_key(monkeypatch):
    monkeypatch.delenv("FIREBASE_PROJECT_ID", raising=False)
    settings = Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        FB_SERVICE_KEY=_service_key({"project_id": "learnify-prod"}),
        CORS_ORIGINS="http://localhost:5173, https://learnify009.web.app",
    )
    assert settings.FIREBASE_PROJECT_ID == "learnify-prod"
    assert settings.allowed_origins == ["https://learnify009.web.app", "http://localhost:5173"]


def test_settings_require_database_url_and_service_key(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("FB_SERVICE_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, FB_SERVICE_KEY=_service_key({"project_id": "p"}))
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="sqlite://")


def test_settings_reject_undecodable_service_key(monkeypatch):
    monkeypatch.delenv("FIREBASE_PROJECT_ID", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="sqlite://", FB_SERVICE_KEY="not base64 json!")
    with pytest.raises(ValueError):
        decode_service_key(base64.b64encode(b"[1, 2]").decode())


def test_profile_insert_race_updates_existing_row(tmp_path):
    """Test that losing the insert race for an email refreshes the winner's row."""
    store = Database(f"sqlite:///{tmp_path / 'race.db'}")
    store.connect()
    db = store.session()

    def insert_first(session, flush_context, instances):
        other = store.session()
        try:
            other.add(User(
                firebase_uid="uid-first",
                email="dup@example.com",
                name="First",
                role=UserRole.STUDENT,
            ))
            other.commit()
        finally:
            other.close()

    event.listen(db, "before_flush", insert_first, once=True)
    try:
        identity = IdentityClaims(uid="uid-second", email="dup@example.com", name="Second")
        user = sync_user_profile(identity, db)

        assert user.firebase_uid == "uid-first"
        assert user.name == "Second"
        assert user.last_login is not None
        assert db.query(User).filter(User.email == "dup@example.com").count() == 1
    finally:
        db.close()
        store.dispose()


def test_signing_keys_fetched_once_under_concurrency(monkeypatch):
    """Test that concurrent verifications share a single JWKS download."""
    calls = []
    release = threading.Event()

    def fake_get(url, timeout=None):
        calls.append(url)
        release.wait(timeout=1)
        return httpx.Response(
            200,
            json={"keys": []},
            headers={"cache-control": "public, max-age=600"},
            request=httpx.Request("GET", url),
        )

    monkeypatch.setattr("app.core.security.httpx.get", fake_get)
    jwks_verifier = FirebaseTokenVerifier("learnify-test", jwks_url="https://keys.example.com/jwks")

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(jwks_verifier._signing_keys) for _ in range(8)]
        release.set()
        results = [future.result() for future in futures]

    assert calls == ["https://keys.example.com/jwks"]
    assert all(result == {"keys": []} for result in results)


def test_signing_keys_refetched_after_expiry(monkeypatch):
    """Test that the cached key set is refreshed once its max-age passes."""
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        return httpx.Response(
            200,
            json={"keys": [{"kid": str(len(calls))}]},
            headers={"cache-control": "max-age=60"},
            request=httpx.Request("GET", url),
        )

    clock = SimpleNamespace(now=1000.0)
    monkeypatch.setattr("app.core.security.httpx.get", fake_get)
    monkeypatch.setattr("app.core.security.time.monotonic", lambda: clock.now)
    jwks_verifier = FirebaseTokenVerifier("learnify-test", jwks_url="https://keys.example.com/jwks")

    assert jwks_verifier._signing_keys() == {"keys": [{"kid": "1"}]}
    clock.now += 30
    assert jwks_verifier._signing_keys() == {"keys": [{"kid": "1"}]}
    clock.now += 31
    assert jwks_verifier._signing_keys() == {"keys": [{"kid": "2"}]}
    assert len(calls) == 2
