"""Cache configuration for the translation cache store.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from i18nengine.constants import DEFAULT_CACHE_TTL

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for the translation cache.

    Constructing ``CacheConfig()`` with no arguments produces a usable
    configuration with a 24 hour time-to-live.

    Attributes:
        ttl: Seconds a loaded dictionary stays valid (default: 86400).
            The TTL applies to every entry of the store; ``0`` makes every
            entry expire on its next read.

    Example:
        >>> CacheConfig(ttl=60.0).ttl
        60.0
    """

    ttl: float = DEFAULT_CACHE_TTL

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If ttl is negative
        """
        if self.ttl < 0:
            msg = "ttl must be non-negative"
            raise ValueError(msg)
