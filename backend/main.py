"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Each app owns its cache and record store (``app.state.cache`` and
``app.state.record_store``). The Supabase client is created on startup and
the cache is cleared on shutdown.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", database_backend="memory", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from supabase import acreate_client

from backend.error_handlers import register_exception_handlers
from backend.monitoring import PerformanceMonitoringMiddleware
from backend.security_headers import SecurityHeadersMiddleware
from backend.settings import Settings, get_settings
from infrastructure.cache import MemoryCacheService
from infrastructure.db import InMemoryRecordStore, SupabaseRecordStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    # Create FastAPI app
    app = FastAPI(
        title="LiftTracker API",
        description="Workout tracking API for strength lifts and metcons",
        version="1.0.0",
        lifespan=_lifespan,
    )

    app.state.settings = settings
    app.state.cache = MemoryCacheService(
        max_entries=settings.cache_max_entries,
        compaction_percentage=settings.cache_compaction_percentage,
    )
    app.state.record_store = (
        InMemoryRecordStore() if settings.database_backend == "memory" else None
    )

    # Configure CORS middleware
    _configure_cors(app, settings)

    app.add_middleware(
        PerformanceMonitoringMiddleware,
        slow_request_threshold_ms=settings.slow_request_threshold_ms,
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # Include API routers
    _include_routers(app)

    logger.info(
        f"LiftTracker API created (environment={settings.environment}, "
        f"database={settings.database_backend})"
    )
    return app


@asynccontextmanager
async def _lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    if app.state.record_store is None:
        app.state.record_store = await _connect_supabase(settings)

    yield

    # Shutdown
    app.state.cache.clear()
    logger.info("Cache cleared on shutdown")


async def _connect_supabase(settings: Settings) -> Optional[SupabaseRecordStore]:
    """Create the Supabase-backed record store, or None if unavailable."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning(
            "Supabase credentials not configured. Data endpoints will return 503."
        )
        return None

    try:
        client = await acreate_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None

    logger.info("Supabase record store connected")
    return SupabaseRecordStore(client)


def _configure_logging(settings: Settings) -> None:
    """Set the root log level from settings."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(settings.log_level)


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            profiles_sample_rate=0.1,
        )
        logger.info("Sentry initialized for lifttracker-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    trusted_origins.extend(settings.cors_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        auth_router,
        exercise_types_router,
        health_router,
        metcon_types_router,
        metcon_workouts_router,
        movement_types_router,
        strength_lifts_router,
        users_router,
        workout_sessions_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(workout_sessions_router)
    app.include_router(strength_lifts_router)
    app.include_router(metcon_workouts_router)

    # Reference catalogs
    app.include_router(exercise_types_router)
    app.include_router(metcon_types_router)
    app.include_router(movement_types_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
