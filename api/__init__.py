"""
API package for the LiftTracker API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_cache_service,
    get_current_user,
    get_record_store,
    get_settings,
)

__all__ = [
    # Settings
    "get_settings",
    # Store and cache
    "get_record_store",
    "get_cache_service",
    # Authentication
    "get_current_user",
]
