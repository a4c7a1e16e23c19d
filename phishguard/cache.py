"""
Analysis Result Cache

In-memory TTL cache for analysis payloads.
Key = SHA-256(text + engine version). TTL = 1 hour by default.

analyze() is pure, so a cached payload is always the payload a
fresh run would build. The engine version is part of the key so a
catalog change never serves stale scores.

Usage:
    from phishguard.cache import scan_cache
    cached = await scan_cache.get(text)
    if cached:
        return cached
    result = await scan_email(text)
    await scan_cache.put(text, result)
"""

from __future__ import annotations

import asyncio
import hashlib
import time
from typing import Optional

from phishguard.config import settings
from phishguard.engine import ENGINE_VERSION


class ScanCache:
    """Async-safe in-memory cache with TTL eviction."""

    def __init__(self, ttl_seconds: int = 3600, max_entries: int = 500):
        self._cache: dict[str, tuple[float, dict]] = {}
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _make_key(text: str, version: str = ENGINE_VERSION) -> str:
        raw = f"{text}||{version}"
        return hashlib.sha256(raw.encode("utf-8", errors="replace")).hexdigest()

    async def get(self, text: str) -> Optional[dict]:
        """Return cached payload if present and not expired."""
        key = self._make_key(text)
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            ts, result = entry
            if time.monotonic() - ts > self._ttl:
                del self._cache[key]
                self._misses += 1
                return None

            self._hits += 1
            return {**result, "cached": True}

    async def put(self, text: str, result: dict) -> None:
        """Store a payload. Evicts the oldest entry when full."""
        key = self._make_key(text)
        async with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_entries:
                oldest_key = min(
                    self._cache, key=lambda k: self._cache[k][0],
                )
                del self._cache[oldest_key]

            self._cache[key] = (time.monotonic(), result)

    async def invalidate(self, text: str) -> None:
        """Remove a specific entry."""
        key = self._make_key(text)
        async with self._lock:
            self._cache.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    @property
    def stats(self) -> dict:
        """Cache hit/miss statistics."""
        total = self._hits + self._misses
        return {
            "entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }


# Shared across the application
scan_cache = ScanCache(
    ttl_seconds=settings.CACHE_TTL_SECONDS,
    max_entries=settings.CACHE_MAX_ENTRIES,
)
