"""Response cache abstractions."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


@dataclass(frozen=True)
class CachedResponse:
    """Stored copy of a full HTTP response."""

    status_code: int
    headers: tuple[tuple[str, str], ...]
    body: bytes


class ResponseCache(Protocol):
    """Key-value store for rendered responses."""

    async def get(self, key: str) -> CachedResponse | None:
        """Return a cached response if present and not expired."""

    async def set(self, key: str, value: CachedResponse, ttl_seconds: int) -> None:
        """Store a response with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: CachedResponse
    expires_at: datetime


@dataclass
class InMemoryResponseCache(ResponseCache):
    """Process-local cache with wall-clock expiry."""

    _entries: dict[str, _CacheEntry] = field(default_factory=dict)

    async def get(self, key: str) -> CachedResponse | None:
        """Return a cached response if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    async def set(self, key: str, value: CachedResponse, ttl_seconds: int) -> None:
        """Store a response with a TTL, dropping entries that have expired."""
        now = datetime.now(tz=UTC)
        self._evict_expired(now)
        if ttl_seconds <= 0:
            self._entries.pop(key, None)
            return
        expires_at = now + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def _evict_expired(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]
