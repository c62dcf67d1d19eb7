"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.cache_medium_ttl_seconds)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------
    database_backend: str = Field(
        default="supabase",
        description="Record store: 'supabase' or 'memory' (local development)",
    )
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Authentication - JWT
    # -------------------------------------------------------------------------
    jwt_secret: str = Field(
        default="lifttracker-jwt-secret-change-in-production",
        description="Secret key for HS256 access token signing",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="Access token signing algorithm",
    )
    jwt_issuer: str = Field(
        default="lifttracker",
        description="Issuer claim for access tokens",
    )
    jwt_expiry_minutes: int = Field(
        default=60 * 24,
        ge=1,
        description="Access token lifetime in minutes",
    )

    # -------------------------------------------------------------------------
    # Authentication - Identity Provider
    # -------------------------------------------------------------------------
    identity_jwks_url: Optional[str] = Field(
        default=None,
        description="JWKS endpoint used to verify RS256 identity tokens",
    )
    identity_token_secret: Optional[str] = Field(
        default=None,
        description="Shared secret for HS256 identity tokens when no JWKS URL is set",
    )
    identity_issuer: Optional[str] = Field(
        default=None,
        description="Expected issuer of identity tokens",
    )
    identity_audience: Optional[str] = Field(
        default=None,
        description="Expected audience of identity tokens",
    )
    admin_emails: str = Field(
        default="",
        description="Comma-separated emails granted the admin role",
    )

    # -------------------------------------------------------------------------
    # Caching
    # -------------------------------------------------------------------------
    cache_short_ttl_seconds: int = Field(
        default=5 * 60,
        ge=1,
        description="Short TTL class",
    )
    cache_medium_ttl_seconds: int = Field(
        default=30 * 60,
        ge=1,
        description="Medium TTL class (user and workout data)",
    )
    cache_long_ttl_seconds: int = Field(
        default=2 * 60 * 60,
        ge=1,
        description="Long TTL class (reference catalogs)",
    )
    cache_extra_long_ttl_seconds: int = Field(
        default=24 * 60 * 60,
        ge=1,
        description="Extra-long TTL class",
    )
    cache_max_entries: int = Field(
        default=1000,
        ge=1,
        description="Entry count that triggers cache compaction",
    )
    cache_compaction_percentage: float = Field(
        default=0.1,
        gt=0,
        le=1,
        description="Fraction of entries evicted when the cache is full",
    )

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------
    slow_request_threshold_ms: int = Field(
        default=1000,
        ge=1,
        description="Requests slower than this are logged as warnings",
    )
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated list of extra trusted origins",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def admin_emails_list(self) -> list[str]:
        """Parse admin emails into a lowercased list."""
        return [e.strip().lower() for e in self.admin_emails.split(",") if e.strip()]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("database_backend")
    @classmethod
    def validate_database_backend(cls, v: str) -> str:
        """Ensure the record store backend is known."""
        valid_backends = {"supabase", "memory"}
        if v.lower() not in valid_backends:
            raise ValueError(
                f"Invalid database backend '{v}'. Must be one of: {valid_backends}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
