"""Backing caches — the cache contract and the default bounded cache."""

from .protocol import Cache, CacheAdapter, as_cache, is_cache
from .options import BoundedCacheOptions
from .bounded import BoundedCache

__all__ = [
    "Cache",
    "CacheAdapter",
    "as_cache",
    "is_cache",
    "BoundedCacheOptions",
    "BoundedCache",
]
