"""
Cache key builders, tags and TTL classes.

Keys are namespaced strings such as ``user:id:{id}`` or
``user:{id}:workout-sessions:{start}:{end}``. Every per-user entry is also
tagged with ``owner:{id}`` so one remove_by_tag() call drops the group.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

# TTL classes in seconds
SHORT_TTL = 5 * 60
MEDIUM_TTL = 30 * 60
LONG_TTL = 2 * 60 * 60
EXTRA_LONG_TTL = 24 * 60 * 60


@dataclass(frozen=True)
class CacheTTL:
    """TTL classes, usually built from Settings."""

    short: float = SHORT_TTL
    medium: float = MEDIUM_TTL
    long: float = LONG_TTL
    extra_long: float = EXTRA_LONG_TTL

    @classmethod
    def from_settings(cls, settings) -> "CacheTTL":
        return cls(
            short=settings.cache_short_ttl_seconds,
            medium=settings.cache_medium_ttl_seconds,
            long=settings.cache_long_ttl_seconds,
            extra_long=settings.cache_extra_long_ttl_seconds,
        )

    @property
    def user_data(self) -> float:
        return self.medium

    @property
    def workout_data(self) -> float:
        return self.medium

    @property
    def reference_data(self) -> float:
        return self.long


# =============================================================================
# Users
# =============================================================================


def user_by_id(user_id: str) -> str:
    return f"user:id:{user_id}"


def user_by_email(email: str) -> str:
    return f"user:email:{email.strip().lower()}"


def owner_tag(user_id: str) -> str:
    return f"owner:{user_id}"


# =============================================================================
# Workout sessions
# =============================================================================


def user_workout_sessions(
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> str:
    start = start_date.isoformat() if start_date else "*"
    end = end_date.isoformat() if end_date else "*"
    return f"user:{user_id}:workout-sessions:{start}:{end}"


# =============================================================================
# Reference catalogs
# =============================================================================


def catalog_tag(table: str) -> str:
    return f"catalog:{table}"


def catalog_by_id(table: str, item_id: int) -> str:
    return f"{table}:id:{item_id}"


def catalog_active(table: str) -> str:
    return f"{table}:active"


def catalog_by_category(table: str, category: str) -> str:
    return f"{table}:category:{category}"
