"""
Dependency Injection Helpers for API tests.

Helpers for pointing a FastAPI app at test doubles instead of the
Supabase store and the app's own cache.

Usage:
    from tests.fakes.conftest import override_backends, reset_overrides

    def test_something():
        app = create_app(Settings(environment="test", _env_file=None))
        store, cache = override_backends(app)
        seed_catalogs(store)

        client = TestClient(app)
        ...

        reset_overrides(app)
"""

from typing import Any, Callable, Optional, Tuple

from fastapi import FastAPI

from api import deps
from tests.fakes.cache_service import RecordingCacheService
from tests.fakes.record_store import CountingRecordStore


def reset_overrides(app: FastAPI) -> None:
    """Reset all FastAPI dependency overrides."""
    app.dependency_overrides.clear()


def override_dependency(app: FastAPI, dependency: Callable[..., Any], value: Any) -> None:
    """Make a dependency provider return a fixed value."""
    app.dependency_overrides[dependency] = lambda: value


def override_backends(
    app: FastAPI,
    store: Optional[CountingRecordStore] = None,
    cache: Optional[RecordingCacheService] = None,
) -> Tuple[CountingRecordStore, RecordingCacheService]:
    """
    Route the app's record store and cache providers to test doubles.

    Returns:
        The (store, cache) pair in use
    """
    store = store if store is not None else CountingRecordStore()
    cache = cache if cache is not None else RecordingCacheService()
    override_dependency(app, deps.get_record_store, store)
    override_dependency(app, deps.get_cache_service, cache)
    return store, cache


def override_user(app: FastAPI, user_id: str) -> None:
    """Authenticate every request as ``user_id``."""

    async def mock_get_current_user():
        return user_id

    app.dependency_overrides[deps.get_current_user] = mock_get_current_user
