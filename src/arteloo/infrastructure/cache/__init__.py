"""Cache Infrastructure - Backend-Implementations."""

from .memory_adapter import MemoryCacheAdapter

__all__ = [
    "MemoryCacheAdapter",
]
