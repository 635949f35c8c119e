"""In-memory cache adapter - process-local TTL store, no persistence."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, Optional, TypeVar

import structlog

from arteloo.domain.entities.arte import CacheEntry

log = structlog.get_logger(__name__)

T = TypeVar("T")


class MemoryCacheAdapter:
    """Async TTL cache backed by a plain dict.

    - Entries are visible only while ``clock() < expires_at``; stale entries
      are replaced lazily on the next access, never swept.
    - A store lock guards the dict; per-key locks collapse concurrent misses
      on the same key into a single producer call.
    - Implements context manager (`async with`).

    Args:
        ttl_seconds: Default TTL for entries stored without explicit value.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._key_locks: dict[str, asyncio.Lock] = {}

        log.info("memory_cache_init", default_ttl=ttl_seconds)

    # --- Context Manager ---
    async def __aenter__(self) -> MemoryCacheAdapter:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.clear()

    def __len__(self) -> int:
        return len(self._entries)

    # --- CachePort implementation ---
    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        *,
        ttl: float | None = None,
    ) -> T:
        """Return the fresh value for `key`, computing it on a miss.

        The producer runs at most once per miss; its exceptions propagate
        and leave the cache untouched.
        """
        entry = await self._fresh_entry(key)
        if entry is not None:
            log.debug("cache_hit", key=key)
            return entry.value

        async with await self._key_lock(key):
            # Another task may have filled the key while we waited.
            entry = await self._fresh_entry(key)
            if entry is not None:
                log.debug("cache_hit", key=key, waited=True)
                return entry.value

            log.debug("cache_miss", key=key)
            value = await producer()
            await self.set(key, value, ttl=ttl)
            return value

    async def get(self, key: str) -> Optional[Any]:
        entry = await self._fresh_entry(key)
        return entry.value if entry is not None else None

    async def set(self, key: str, value: Any, *, ttl: float | None = None) -> None:
        """Store `value` with expiry ``now + ttl`` (default: self.default_ttl)."""
        expire_time = ttl if ttl is not None else self.default_ttl
        async with self._lock:
            self._entries[key] = CacheEntry(
                value=value,
                expires_at=self._clock() + expire_time,
            )
        log.debug("cache_set", key=key, ttl=expire_time)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            deleted = self._entries.pop(key, None) is not None
        log.debug("cache_delete", key=key, deleted=deleted)
        return deleted

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
            self._key_locks.clear()

    # --- Internals ---
    async def _fresh_entry(self, key: str) -> CacheEntry | None:
        async with self._lock:
            entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock()):
            return None
        return entry

    async def _key_lock(self, key: str) -> asyncio.Lock:
        async with self._lock:
            return self._key_locks.setdefault(key, asyncio.Lock())
