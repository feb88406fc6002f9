"""Simple cache abstractions."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with ``prefix`` and return the count."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """In-memory cache for a single process."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def delete_prefix(self, prefix: str) -> int:
        """Remove matching keys."""
        keys = [key for key in self._entries if key.startswith(prefix)]
        for key in keys:
            del self._entries[key]
        return len(keys)
