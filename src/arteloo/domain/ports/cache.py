"""Cache Port - Interface for the in-process TTL cache."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol):
    """Port for async key-value cache with TTL support.

    Implementations:
      - MemoryCacheAdapter (process-local dict, monotonic clock)

    Each adapter MUST support async context-manager semantics:
        async with cache:
            await cache.get_or_compute("key", producer)
    """

    async def get_or_compute(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        *,
        ttl: float | None = None,
    ) -> T:
        """Return the fresh value for `key`, or await `producer` and store it.

        Producer exceptions propagate and are never stored.
        """
        ...

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: float | None = None) -> None:
        """Set value with optional TTL (seconds)."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key. True = deleted, False = did not exist."""
        ...

    async def clear(self) -> None:
        """Delete ALL keys."""
        ...

    async def aclose(self) -> None:
        """Cleanup hook."""
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
