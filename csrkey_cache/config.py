"""
CSRKey Cache Configuration — validated settings for a key cache instance.

Settings can be given directly, as a mapping, or read from the environment:
    CSRKEY_KEYLENGTH = <random bytes per key, default 32>
    CSRKEY_CACHE_MAX = <max entries of the default cache, default 1024>
    CSRKEY_CACHE_MAX_AGE = <entry age limit in seconds, default 900>
    CSRKEY_CACHE_STALE = <"true" to return stale values once before purge>

Security Note:
    Never log generated keys. Only log lengths and counts.
"""
import os
import secrets
import logging
from typing import Any
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

from .backend.protocol import as_cache, is_cache
from .backend.options import BoundedCacheOptions

logger = logging.getLogger("csrkey.cache")

DEFAULT_KEYLENGTH = 32

_TRUE_VALUES = ("1", "true", "yes", "on")


class CsrKeyCacheConfig(BaseModel):
    """Key cache configuration.

    ``cache`` holds either a ready-made cache capability (anything exposing
    ``set``/``get``/``has``/``delete``) or :class:`BoundedCacheOptions` for
    the default cache. Mappings are read as options, merged over defaults;
    a bare integer is read as ``max``.

    ``keylength`` and ``csrng`` are trusted as given: a misconfigured value
    fails when the random source is first called, not here.
    """

    cache: Any = Field(default_factory=BoundedCacheOptions)
    keylength: int = DEFAULT_KEYLENGTH
    csrng: Any = Field(default=secrets.token_bytes)

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("cache", mode="before")
    @classmethod
    def resolve_cache(cls, v: Any) -> Any:
        """Tell a provided capability apart from default cache options."""
        if v is None:
            return BoundedCacheOptions()
        if isinstance(v, BoundedCacheOptions):
            return v
        if is_cache(v):
            return as_cache(v)
        if isinstance(v, Mapping):
            return BoundedCacheOptions.model_validate(dict(v))
        if isinstance(v, int) and not isinstance(v, bool):
            return BoundedCacheOptions(max=v)
        logger.debug(
            "Ignoring unrecognized cache option of type %s", type(v).__name__
        )
        return BoundedCacheOptions()

    @property
    def provided_cache(self) -> bool:
        """True when ``cache`` is a caller-supplied capability."""
        return not isinstance(self.cache, BoundedCacheOptions)

    @classmethod
    def from_env(cls, **overrides: Any) -> "CsrKeyCacheConfig":
        """Create CsrKeyCacheConfig by loading values from environment.

        Args:
            overrides: Fields taking precedence over the environment
                (e.g. ``csrng``).

        Returns:
            Populated CsrKeyCacheConfig instance.
        """
        options: dict[str, Any] = {}
        raw = os.environ.get("CSRKEY_CACHE_MAX")
        if raw is not None:
            options["max"] = int(raw)
        raw = os.environ.get("CSRKEY_CACHE_MAX_AGE")
        if raw is not None:
            options["max_age"] = float(raw)
        raw = os.environ.get("CSRKEY_CACHE_STALE")
        if raw is not None:
            options["stale"] = raw.strip().lower() in _TRUE_VALUES
        values: dict[str, Any] = {"cache": options}
        raw = os.environ.get("CSRKEY_KEYLENGTH")
        if raw is not None:
            values["keylength"] = int(raw)
        values.update(overrides)
        logger.debug(
            "Loaded key cache settings from environment: %s",
            sorted(k for k in os.environ if k.startswith("CSRKEY_")),
        )
        return cls(**values)
