"""Construction parameters of the default bounded cache."""
from typing import Any, Callable, Optional
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_CACHE_MAX = 1024
DEFAULT_CACHE_MAX_AGE = 15 * 60  # seconds


class BoundedCacheOptions(BaseModel):
    """Validated options for :class:`~csrkey_cache.backend.bounded.BoundedCache`.

    ``max`` bounds the number of entries, or their total size when a
    ``length`` function is given. ``max_age`` is in seconds; ``None`` or
    ``0`` disables the age limit. ``maxAge`` is also accepted, in
    milliseconds, and converted to ``max_age``.
    """

    max: int = Field(default=DEFAULT_CACHE_MAX, ge=1)
    max_age: Optional[float] = Field(default=DEFAULT_CACHE_MAX_AGE, ge=0)
    length: Optional[Callable[[Any], int]] = None
    dispose: Optional[Callable[[str, Any], None]] = None
    stale: bool = False

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def max_age_from_ms(cls, data: Any) -> Any:
        """Read ``maxAge`` (milliseconds) into ``max_age`` (seconds)."""
        if isinstance(data, Mapping) and "maxAge" in data:
            data = dict(data)
            max_age_ms = data.pop("maxAge")
            if "max_age" not in data:
                data["max_age"] = (
                    max_age_ms / 1000 if max_age_ms is not None else None
                )
        return data

    @field_validator("max_age")
    @classmethod
    def no_age_limit(cls, v: Optional[float]) -> Optional[float]:
        """Normalize a zero age limit to ``None``."""
        return v or None
