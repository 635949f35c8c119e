from .arte import ArteClientPort
from .cache import CachePort

__all__ = [
    "ArteClientPort",
    "CachePort",
]
