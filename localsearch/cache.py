from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, Callable

_DEFAULT_TTL = 300  # 5 minutes
_RESPONSE_CACHE_MAX_ENTRIES = 1024


def make_key(namespace: str, params: dict) -> str:
    normalized = json.dumps(params, sort_keys=True, default=str)
    digest = hashlib.sha256(normalized.encode()).hexdigest()[:16]
    return f"{namespace}:{digest}"


class TTLCache:
    """In-process read-through cache whose entries expire after a fixed TTL.

    Entries are never invalidated on writes to the underlying data; a stale
    value lives until its TTL runs out. Expired entries are purged on every
    write, and when ``max_entries`` is set the oldest entries are evicted
    once it is reached. All access goes through one lock, so an instance can
    be shared by request threads.
    """

    def __init__(
        self,
        default_ttl: float = _DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
        max_entries: int | None = None,
    ) -> None:
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, dict[str, Any]] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry and now < entry["expires_at"]:
                self._hits += 1
                return entry["value"]
            if entry:
                self._entries.pop(key, None)
            self._misses += 1
            return None

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._purge_expired(now)
            self._entries.pop(key, None)
            if self.max_entries is not None:
                while self._entries and len(self._entries) >= self.max_entries:
                    # dicts keep insertion order, so the first key is the oldest write
                    del self._entries[next(iter(self._entries))]
            self._entries[key] = {"value": value, "expires_at": now + ttl}

    def get_or_set(self, key: str, compute: Callable[[], Any], ttl: float | None = None) -> Any:
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value, ttl)
        return value

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if now >= entry["expires_at"]]
        for key in expired:
            del self._entries[key]


response_cache = TTLCache(default_ttl=60, max_entries=_RESPONSE_CACHE_MAX_ENTRIES)


def get_cache_stats() -> dict:
    return response_cache.stats()


def clear_cache() -> None:
    response_cache.clear()
