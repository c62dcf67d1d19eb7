"""
Shared pytest fixtures.

Repositories and services are tested against CountingRecordStore and
MemoryCacheService; API tests build an app per test with the store and the
cache overridden.
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from backend.auth import create_access_token
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    CountingRecordStore,
    FakeClock,
    RecordingCacheService,
    seed_catalogs,
    seed_user,
)
from tests.fakes.conftest import override_backends, reset_overrides

TEST_JWT_SECRET = "test-secret-with-enough-length-for-hs256"
TEST_IDENTITY_SECRET = "identity-provider-secret-for-hs256-tests"
TEST_ADMIN_EMAIL = "admin@example.com"


@pytest.fixture
def store():
    """Empty counting record store."""
    return CountingRecordStore()


@pytest.fixture
def seeded_store(store):
    """Store with catalogs and two users (user-a, user-b)."""
    seed_catalogs(store)
    seed_user(store, "user-a")
    seed_user(store, "user-b")
    store.reset_counts()
    return store


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Recording cache driven by the fake clock."""
    return RecordingCacheService(clock=clock)


@pytest.fixture
def test_settings():
    return Settings(
        environment="test",
        database_backend="memory",
        jwt_secret=TEST_JWT_SECRET,
        identity_token_secret=TEST_IDENTITY_SECRET,
        admin_emails=TEST_ADMIN_EMAIL,
        _env_file=None,
    )


@pytest.fixture
def test_app(test_settings, seeded_store, cache):
    """App wired to the seeded store and the recording cache."""
    app = create_app(settings=test_settings)
    override_backends(app, seeded_store, cache)
    from api import deps

    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    yield app
    reset_overrides(app)


@pytest.fixture
def api_client(test_app):
    return TestClient(test_app)


@pytest.fixture
def auth_headers(test_settings):
    """Build bearer headers for a user ID and role."""

    def _headers(user_id: str = "user-a", role: str = "user"):
        token = create_access_token(user_id, test_settings, role=role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def identity_token():
    """Build identity provider tokens signed with the test identity secret."""

    def _token(email: str, secret: str = TEST_IDENTITY_SECRET, **claims):
        payload = {
            "email": email,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            **claims,
        }
        return jwt.encode(payload, secret, algorithm="HS256")

    return _token
