"""
Shared fixtures: an in-memory database and locally signed Firebase tokens.
"""
import base64
import json
import os
import time

# Required settings must exist before the application is imported
TEST_PROJECT_ID = "learnify-test"
TEST_SIGNING_KEY = "test-signing-key-that-is-at-least-32-characters"  # nosec B105
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault(
    "FB_SERVICE_KEY",
    base64.b64encode(json.dumps({"project_id": TEST_PROJECT_ID}).encode()).decode(),
)
os.environ["FIREBASE_PROJECT_ID"] = TEST_PROJECT_ID

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_identity_verifier
from app.core.security import ISSUER_PREFIX, FirebaseTokenVerifier
from app.db.session import Database, get_database
from app.main import app


def make_token(
    uid: str,
    email: str = None,
    name: str = None,
    picture: str = None,
    expires_in: int = 3600,
    project_id: str = TEST_PROJECT_ID,
    key: str = TEST_SIGNING_KEY,
) -> str:
    """Create a Firebase-shaped ID token signed with the test key."""
    now = int(time.time())
    claims = {
        "sub": uid,
        "user_id": uid,
        "aud": project_id,
        "iss": f"{ISSUER_PREFIX}{project_id}",
        "iat": now - 10,
        "auth_time": now - 10,
        "exp": now + expires_in,
    }
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    if picture:
        claims["picture"] = picture
    return jwt.encode(claims, key, algorithm="HS256")


@pytest.fixture
def test_database():
    database = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.connect()
    yield database
    database.dispose()


@pytest.fixture
def db_session(test_database):
    session = test_database.session()
    yield session
    session.close()


@pytest.fixture
def verifier():
    return FirebaseTokenVerifier(
        project_id=TEST_PROJECT_ID,
        key=TEST_SIGNING_KEY,
        algorithms=["HS256"],
    )


@pytest.fixture
def client(test_database, verifier):
    app.dependency_overrides[get_database] = lambda: test_database
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Factory for Authorization headers of a given user."""
    def _headers(uid: str, email: str = None, name: str = None, **kwargs) -> dict:
        token = make_token(uid, email=email, name=name, **kwargs)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def alice(auth_headers):
    return auth_headers("uid-alice", email="alice@example.com", name="Alice Tutor")


@pytest.fixture
def bob(auth_headers):
    return auth_headers("uid-bob", email="bob@example.com", name="Bob Student")


@pytest.fixture
def create_tutorial(client, alice):
    """Create a tutorial through the API and return its JSON."""
    def _create(headers=None, **overrides) -> dict:
        payload = {
            "image": "http://x/y.png",
            "language": "Spanish",
            "price": 20,
            "description": "Beginner",
        }
        payload.update(overrides)
        response = client.post("/tutorials", json=payload, headers=headers or alice)
        assert response.status_code == 201, response.text
        return response.json()["tutorial"]
    return _create


@pytest.fixture
def issue_token():
    """Expose make_token to tests."""
    return make_token
