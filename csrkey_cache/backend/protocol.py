"""
Cache Capability — the four-operation contract a backing cache must honor.

Any object exposing ``set``, ``get``, ``has`` and ``delete`` can back a
:class:`~csrkey_cache.keycache.CsrKeyCache`. Objects that name their removal
method ``del`` (not a valid Python identifier, but reachable via ``getattr``)
are wrapped by :class:`CacheAdapter`.
"""
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

V = TypeVar("V")

_OPERATIONS = ("set", "get", "has")


@runtime_checkable
class Cache(Protocol[V]):
    """Generic, minimal cache interface."""

    def set(self, key: str, value: V, expire: Optional[float] = None) -> None:
        ...

    def get(self, key: str) -> Optional[V]:
        ...

    def has(self, key: str) -> bool:
        ...

    def delete(self, key: str) -> None:
        ...


def _remover(obj: Any) -> Optional[str]:
    for name in ("delete", "del"):
        if callable(getattr(obj, name, None)):
            return name
    return None


def is_cache(obj: Any) -> bool:
    """Return True when ``obj`` structurally satisfies the cache contract."""
    if obj is None or isinstance(obj, type):
        return False
    if not all(callable(getattr(obj, name, None)) for name in _OPERATIONS):
        return False
    return _remover(obj) is not None


class CacheAdapter:
    """Expose a ``del``-style cache through the ``delete`` name.

    Calls are forwarded unchanged, so the wrapped object keeps receiving
    every operation.
    """

    def __init__(self, cache: Any):
        self._cache = cache
        self._delete = getattr(cache, "del")

    @property
    def wrapped(self) -> Any:
        return self._cache

    def set(self, key: str, value: Any, expire: Optional[float] = None) -> None:
        self._cache.set(key, value, expire)

    def get(self, key: str) -> Any:
        return self._cache.get(key)

    def has(self, key: str) -> bool:
        return self._cache.has(key)

    def delete(self, key: str) -> None:
        self._delete(key)


def as_cache(obj: Any) -> Cache:
    """Return ``obj`` as a :class:`Cache`, adapting a ``del``-style object.

    Raises:
        TypeError: If ``obj`` does not expose the cache operations.
    """
    if not is_cache(obj):
        raise TypeError(
            f"{type(obj).__name__} does not implement set/get/has/delete"
        )
    if _remover(obj) == "del":
        return CacheAdapter(obj)
    return obj
