"""TTL cache store for loaded namespace trees.

Holds dictionaries keyed by (language, namespace) together with the time
they were loaded. Entries older than the configured TTL are treated as
absent and evicted on the read that discovers them.

Architecture:
    - Plain dict keyed by (language, namespace) tuples
    - Lazy expiry: no background sweeper
    - Hit/miss counters for monitoring, reset by clear()
    - Injectable monotonic clock for deterministic tests

Concurrency:
    Mutated only from the event loop that owns the engine; no locking.

Python 3.13+.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from i18nengine.runtime.cache_config import CacheConfig

if TYPE_CHECKING:
    from i18nengine.localization.types import LanguageCode, NamespaceName, NamespaceTree

__all__ = ["CacheEntry", "TranslationCache"]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached namespace tree.

    Attributes:
        data: The loaded tree
        loaded_at: Clock reading when the entry was stored
        ttl: Seconds the entry stays valid
    """

    data: NamespaceTree
    loaded_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Check whether the entry has outlived its TTL at time ``now``."""
        return now - self.loaded_at >= self.ttl


class TranslationCache:
    """Cache of namespace trees keyed by (language, namespace).

    Attributes:
        ttl: Time-to-live applied to every entry
        hits: Number of reads that found a live entry
        misses: Number of reads that found nothing or an expired entry
    """

    __slots__ = ("_clock", "_entries", "_hits", "_misses", "_ttl")

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize cache store.

        Args:
            config: Cache configuration (default: CacheConfig())
            clock: Time source in seconds (default: time.monotonic)
        """
        self._ttl = (config or CacheConfig()).ttl
        self._clock = clock or time.monotonic
        self._entries: dict[tuple[LanguageCode, NamespaceName], CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, language: LanguageCode, namespace: NamespaceName) -> NamespaceTree | None:
        """Get the cached tree, or None if absent or expired.

        An expired entry is evicted and counted as a miss.
        """
        key = (language, namespace)
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.data

    def put(self, language: LanguageCode, namespace: NamespaceName, tree: NamespaceTree) -> None:
        """Store a tree, replacing any previous entry for the pair."""
        self._entries[(language, namespace)] = CacheEntry(
            data=tree, loaded_at=self._clock(), ttl=self._ttl
        )

    def discard(self, language: LanguageCode, namespace: NamespaceName) -> None:
        """Remove the entry for the pair if present. Counters are unchanged."""
        self._entries.pop((language, namespace), None)

    def clear(self) -> None:
        """Remove all entries and reset hit/miss counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - size (int): Number of stored entries (expired ones included
              until a read evicts them)
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
        """
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }

    def keys(self) -> Iterator[tuple[LanguageCode, NamespaceName]]:
        """Iterate over stored (language, namespace) pairs."""
        return iter(tuple(self._entries))

    def __contains__(self, key: object) -> bool:
        """Membership test that neither counts nor evicts."""
        return key in self._entries

    def __len__(self) -> int:
        """Number of stored entries."""
        return len(self._entries)

    @property
    def ttl(self) -> float:
        """Time-to-live applied to every entry."""
        return self._ttl

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        return self._misses
