"""CSRKey Cache — values stored under cryptographically secure random keys.

Hand out unguessable reference tokens (session IDs, one-time handles)
without managing randomness or collision avoidance:

    >>> cache = get_csrkey_cache()
    >>> key = cache.set({"user": 42})
    >>> cache.get(key)
    {'user': 42}
"""

from .version import __version__
from .backend import Cache, BoundedCache, BoundedCacheOptions, is_cache
from .config import CsrKeyCacheConfig
from .keycache import CsrKeyCache, Csrng, get_csrkey_cache

__all__ = [
    "__version__",
    "Cache",
    "BoundedCache",
    "BoundedCacheOptions",
    "is_cache",
    "CsrKeyCacheConfig",
    "CsrKeyCache",
    "Csrng",
    "get_csrkey_cache",
]
