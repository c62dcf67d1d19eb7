"""
Cache test doubles.

- FakeClock: manually advanced time source for MemoryCacheService
- RecordingCacheService: MemoryCacheService that records every call
"""
from typing import Any, List, Tuple

from infrastructure.cache import MemoryCacheService


class FakeClock:
    """Callable clock; advance() moves time forward in seconds."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingCacheService(MemoryCacheService):
    """
    MemoryCacheService that keeps a log of (method, key) calls.

    Usage:
        cache = RecordingCacheService()
        await users.get_by_id("u1")
        assert cache.count("set") == 1
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.calls: List[Tuple[str, str]] = []

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def keys_for(self, method: str) -> List[str]:
        return [key for name, key in self.calls if name == method]

    def reset_calls(self) -> None:
        self.calls.clear()

    async def get(self, key: str):
        self.calls.append(("get", key))
        return await super().get(key)

    async def set(self, key: str, value, ttl_seconds, *, tags=()):
        self.calls.append(("set", key))
        await super().set(key, value, ttl_seconds, tags=tags)

    async def remove(self, key: str) -> None:
        self.calls.append(("remove", key))
        await super().remove(key)

    async def remove_by_tag(self, tag: str) -> int:
        self.calls.append(("remove_by_tag", tag))
        return await super().remove_by_tag(tag)

    async def remove_by_pattern(self, pattern: str) -> int:
        self.calls.append(("remove_by_pattern", pattern))
        return await super().remove_by_pattern(pattern)
