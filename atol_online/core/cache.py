"""
ATOL Online — Token cache
Key/value store with per-entry TTL. Any object with the TokenCache
methods can be injected, e.g. an adapter over Redis or a shared cache.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol


class TokenCache(Protocol):
    def has(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryTokenCache:
    """Process-local cache. Each operation holds a lock, so it is atomic per key."""

    def __init__(self):
        self._entries: dict[str, tuple[Any, datetime]] = {}
        self._lock = threading.Lock()

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if datetime.now(timezone.utc) >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
