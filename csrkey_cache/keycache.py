"""
CsrKeyCache — values stored under Cryptographically-Secure-Random-Keys.

Every ``set(value)`` draws ``keylength`` bytes from a secure random source,
encodes them as standard base64, and stores the value under that key.
A key already present in the backing cache is discarded and a new one
drawn, so no two live entries share a key.

Security Note:
    Never log generated keys or stored values. Collision avoidance is
    checked against the backing cache at generation time only.
"""
import base64
import logging
from typing import Any, Callable, Generic, Literal, Optional, TypeVar, Union
from collections.abc import Mapping

from .backend import BoundedCache, Cache
from .config import CsrKeyCacheConfig

logger = logging.getLogger("csrkey.cache")

V = TypeVar("V")

Csrng = Callable[[int], bytes]


class CsrKeyCache(Generic[V]):
    """Generic, minimal Cryptographically-Secure-Random-Key (CSRK) cache.

    The instance owns its backing cache and random source; use
    :func:`get_csrkey_cache` to build one from configuration.
    """

    def __init__(self, cache: Cache, keylength: int, csrng: Csrng):
        self._cache = cache
        self._keylength = keylength
        self._csrng = csrng

    @classmethod
    def get_instance(
        cls,
        config: Union[CsrKeyCacheConfig, Mapping[str, Any], None] = None,
        **options: Any,
    ) -> "CsrKeyCache[V]":
        """Build a key cache from configuration.

        Args:
            config: A :class:`CsrKeyCacheConfig` or a mapping of its fields.
            options: Fields merged over ``config`` (``cache``, ``keylength``,
                ``csrng``).

        Returns:
            A new, independent CsrKeyCache.
        """
        if isinstance(config, CsrKeyCacheConfig):
            if options:
                config = CsrKeyCacheConfig(**{**dict(config), **options})
        else:
            values = dict(config or {})
            values.update(options)
            config = CsrKeyCacheConfig(**values)
        if config.provided_cache:
            cache = config.cache
        else:
            cache = BoundedCache(config.cache)
        logger.debug(
            "Key cache created: keylength=%d, backend=%s",
            config.keylength, type(cache).__name__,
        )
        return cls(cache, config.keylength, config.csrng)

    @property
    def cache(self) -> Cache:
        return self._cache

    @property
    def keylength(self) -> int:
        return self._keylength

    def _new_key(self) -> str:
        """Return a secure random key not present in the backing cache."""
        while True:
            rnd = self._csrng(self._keylength)
            if len(rnd) != self._keylength:
                raise ValueError(
                    f"random source returned {len(rnd)} bytes, "
                    f"expected {self._keylength}"
                )
            key = base64.b64encode(bytes(rnd)).decode("ascii")
            if not self._cache.has(key):
                return key
            logger.debug("Key collision, drawing a new key")

    def set(
        self, value: V, expire: Optional[float] = None
    ) -> Union[str, Literal[False]]:
        """Store ``value`` and return its secure random key.

        Args:
            value: Value to store; never inspected.
            expire: Age limit passed unchanged to the backing cache.

        Returns:
            The key, or ``False`` when the backing cache did not keep
            the value (e.g. rejected as too large).
        """
        key = self._new_key()
        self._cache.set(key, value, expire)
        if self._cache.has(key):
            return key
        logger.debug("Backing cache did not store the value")
        return False

    def get(self, key: str) -> Optional[V]:
        """Return the value stored under ``key``, or ``None``."""
        return self._cache.get(key)

    def has(self, key: str) -> bool:
        return self._cache.has(key)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def __contains__(self, key: object) -> bool:
        return self.has(str(key))

    def __repr__(self) -> str:
        return (
            f'<CsrKeyCache [keylength:{self._keylength}] '
            f'cache={type(self._cache).__name__}>'
        )


def get_csrkey_cache(
    config: Union[CsrKeyCacheConfig, Mapping[str, Any], None] = None,
    **options: Any,
) -> CsrKeyCache:
    """Factory of :class:`CsrKeyCache` instances.

    ``get_csrkey_cache()`` returns a cache of 32-byte keys backed by a
    :class:`BoundedCache` of 1024 entries aged out after 15 minutes.
    """
    return CsrKeyCache.get_instance(config, **options)


__all__ = [
    "Csrng",
    "CsrKeyCache",
    "get_csrkey_cache",
]
