"""
Tests for repository protocol definitions.

These tests verify that:
1. Protocol definitions are valid and importable
2. Protocols define the expected methods
3. The store-backed and cached implementations satisfy the Protocol contracts
"""
import pytest

from application.ports import (
    CacheService,
    CatalogRepository,
    MetconWorkoutRepository,
    RecordStore,
    StrengthLiftRepository,
    UserRepository,
    WorkoutSessionRepository,
)
from infrastructure import db
from infrastructure.cache import (
    CachedCatalogRepository,
    CachedUserRepository,
    MemoryCacheService,
)
from application.cache_keys import CacheTTL

# All tests in this module are pure logic tests (no TestClient) - mark as unit
pytestmark = pytest.mark.unit


def _methods(cls, names):
    return [name for name in names if not callable(getattr(cls, name, None))]


class TestProtocolMethods:
    """Each port declares the operations the services rely on."""

    def test_record_store(self):
        assert _methods(RecordStore, ["get", "find", "insert", "update", "delete", "delete_where"]) == []

    def test_cache_service(self):
        assert _methods(
            CacheService,
            ["get", "set", "remove", "remove_by_pattern", "remove_by_tag", "get_or_set"],
        ) == []

    def test_user_repository(self):
        assert _methods(
            UserRepository,
            ["get_by_id", "get_by_email", "create", "update", "delete", "exists"],
        ) == []

    def test_workout_session_repository(self):
        assert _methods(
            WorkoutSessionRepository,
            ["get_by_id", "list_by_owner", "get_by_user_and_date", "exists_for_date",
             "create", "update", "delete"],
        ) == []

    def test_strength_lift_repository(self):
        assert _methods(
            StrengthLiftRepository,
            ["get_by_id", "list_by_session", "get_max_order", "list_by_exercise_type",
             "get_personal_record"],
        ) == []

    def test_metcon_workout_repository(self):
        assert _methods(
            MetconWorkoutRepository,
            ["get_by_id", "list_by_session", "get_max_order", "list_by_metcon_type"],
        ) == []

    def test_catalog_repository(self):
        assert _methods(
            CatalogRepository,
            ["get_by_id", "list_active", "list_all", "list_by_category",
             "exists_by_name", "create", "update", "deactivate"],
        ) == []


class TestImplementationsSatisfyProtocols:
    """Concrete adapters pass runtime Protocol checks."""

    @pytest.fixture
    def store(self):
        return db.InMemoryRecordStore()

    def test_user_repositories(self, store):
        plain = db.UserRepository(store)
        cached = CachedUserRepository(plain, MemoryCacheService(), CacheTTL())
        assert isinstance(plain, UserRepository)
        assert isinstance(cached, UserRepository)

    def test_session_repository(self, store):
        assert isinstance(db.WorkoutSessionRepository(store), WorkoutSessionRepository)

    def test_entry_repositories(self, store):
        assert isinstance(db.StrengthLiftRepository(store), StrengthLiftRepository)
        assert isinstance(db.MetconWorkoutRepository(store), MetconWorkoutRepository)

    def test_catalog_repositories(self, store):
        plain = db.CatalogRepository(store, db.EXERCISE_TYPE_CATALOG)
        cached = CachedCatalogRepository(plain, MemoryCacheService(), CacheTTL())
        assert isinstance(plain, CatalogRepository)
        assert isinstance(cached, CatalogRepository)
