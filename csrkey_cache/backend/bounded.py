"""
BoundedCache — Default size and age limited backing cache.

Entries are held in a :class:`cachetools.LRUCache`, which evicts the least
recently used entry once the item count (or total ``length`` of the stored
values) would exceed ``max``. Age limits are tracked per entry:

- ``set(key, value, expire)`` stamps the entry with ``now + expire`` seconds,
  falling back to the cache-wide ``max_age`` when ``expire`` is not given.
- expired entries are purged lazily, on ``get``/``peek`` or ``prune()``.
- with ``stale=True``, ``get`` returns an expired value once before purging.

``dispose(key, value)`` is called for every entry leaving the cache.
"""
import time
import logging
from collections import OrderedDict
from typing import Any, Callable, NamedTuple, Optional

from cachetools import Cache as _BaseCache, LRUCache

from .options import BoundedCacheOptions

logger = logging.getLogger("csrkey.cache")


class _Entry(NamedTuple):
    value: Any
    expires: Optional[float]


class _EvictingLRUCache(LRUCache):
    """LRUCache reporting capacity evictions to a callback.

    Also keeps keys in recency order, most recently used last.
    """

    def __init__(
        self,
        maxsize: int,
        getsizeof: Optional[Callable[[Any], int]],
        on_evict: Callable[[str, _Entry], None],
    ):
        super().__init__(maxsize, getsizeof)
        self._on_evict = on_evict
        self._recent: OrderedDict[str, None] = OrderedDict()

    def __getitem__(self, key: str) -> _Entry:
        entry = super().__getitem__(key)
        if key in self._recent:
            self._recent.move_to_end(key)
        return entry

    def __setitem__(self, key: str, entry: _Entry) -> None:
        super().__setitem__(key, entry)
        self._recent[key] = None
        self._recent.move_to_end(key)

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key)
        self._recent.pop(key, None)

    def popitem(self):
        key, entry = super().popitem()
        self._on_evict(key, entry)
        return key, entry

    def peek(self, key: str) -> _Entry:
        # read without touching recency order
        return _BaseCache.__getitem__(self, key)

    def recent(self) -> list[str]:
        """Keys, most recently used first."""
        return list(reversed(self._recent))


class BoundedCache:
    """Bounded LRU cache with per-entry age limits.

    Satisfies the :class:`~csrkey_cache.backend.protocol.Cache` contract.
    """

    def __init__(
        self,
        options: Optional[BoundedCacheOptions] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._options = options if options is not None else BoundedCacheOptions()
        self._timer = timer
        self._max_age = self._options.max_age
        self._dispose = self._options.dispose
        self._length = self._options.length
        getsizeof = None
        if self._length is not None:
            length = self._length
            getsizeof = lambda entry: length(entry.value)  # noqa: E731
        self._lru = _EvictingLRUCache(
            self._options.max, getsizeof, self._evicted,
        )

    @property
    def options(self) -> BoundedCacheOptions:
        return self._options

    @property
    def max(self) -> int:
        return self._options.max

    @property
    def max_age(self) -> Optional[float]:
        return self._max_age

    @property
    def length(self) -> int:
        """Total size of the stored entries (item count without ``length``)."""
        return int(self._lru.currsize)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _evicted(self, key: str, entry: _Entry) -> None:
        logger.debug("Bounded cache evicted an entry (size=%d)", len(self._lru))
        self._disposed(key, entry)

    def _disposed(self, key: str, entry: _Entry) -> None:
        if self._dispose is not None:
            self._dispose(key, entry.value)

    def _is_stale(self, entry: _Entry) -> bool:
        return entry.expires is not None and self._timer() >= entry.expires

    def _remove(self, key: str) -> Optional[_Entry]:
        if key not in self._lru:
            return None
        entry = self._lru.peek(key)
        del self._lru[key]
        self._disposed(key, entry)
        return entry

    def _read(self, key: str, touch: bool) -> Any:
        if key not in self._lru:
            return None
        entry = self._lru[key] if touch else self._lru.peek(key)
        if self._is_stale(entry):
            self._remove(key)
            return entry.value if self._options.stale else None
        return entry.value

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any, expire: Optional[float] = None) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: Entry key.
            value: Value to store.
            expire: Entry age limit in seconds; ``None`` or ``0`` uses the
                cache-wide ``max_age``.

        A value whose own ``length`` exceeds ``max`` is not stored.
        """
        age = expire or self._max_age
        entry = _Entry(value, self._timer() + age if age else None)
        self._remove(key)
        if self._length is not None and self._length(value) > self._options.max:
            logger.debug("Bounded cache rejected an entry larger than max")
            self._disposed(key, entry)
            return
        self._lru[key] = entry

    def get(self, key: str) -> Any:
        """Return the value under ``key`` and mark it recently used.

        Returns ``None`` when absent or expired (or the stale value once,
        with ``stale=True``).
        """
        return self._read(key, touch=True)

    def peek(self, key: str) -> Any:
        """Like :meth:`get`, without updating recency."""
        return self._read(key, touch=False)

    def has(self, key: str) -> bool:
        """True if a live (non-expired) entry is stored under ``key``."""
        if key not in self._lru:
            return False
        return not self._is_stale(self._lru.peek(key))

    def delete(self, key: str) -> None:
        """Remove the entry under ``key``, if any."""
        self._remove(key)

    def prune(self) -> int:
        """Purge all expired entries.

        Returns:
            Number of entries removed.
        """
        expired = [
            key for key in list(self._lru) if self._is_stale(self._lru.peek(key))
        ]
        for key in expired:
            self._remove(key)
        return len(expired)

    def reset(self) -> None:
        """Drop every entry, disposing each one."""
        for key in list(self._lru):
            self._remove(key)

    def keys(self) -> list[str]:
        """Keys of the live entries, most recently used first."""
        return [
            key for key in self._lru.recent()
            if not self._is_stale(self._lru.peek(key))
        ]

    def __len__(self) -> int:
        return len(self._lru)

    def __contains__(self, key: object) -> bool:
        return self.has(str(key))

    def __repr__(self) -> str:
        return (
            f'<BoundedCache [max:{self.max}, max_age:{self.max_age}] '
            f'items={len(self)}>'
        )
