"""Bounded in-memory TTL cache."""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for small lookup results."""

    def lookup(self, key: str) -> tuple[bool, object | None]:
        """Return ``(hit, value)``; cached ``None`` values count as hits."""

    def store(self, key: str, value: object | None, ttl_seconds: int) -> None:
        """Store a value (possibly ``None``) with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: object | None
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache evicting the oldest entry once full."""

    max_entries: int = 512
    _entries: "OrderedDict[str, _CacheEntry]" = field(default_factory=OrderedDict)

    def lookup(self, key: str) -> tuple[bool, object | None]:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return False, None
        return True, entry.value

    def store(self, key: str, value: object | None, ttl_seconds: int) -> None:
        """Store a value, dropping the oldest entry when over capacity."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries.pop(key, None)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
