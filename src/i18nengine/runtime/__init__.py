"""Translation runtime package.

Provides the cache store, the key resolver, namespace tree helpers and the
load retry policy. Knows nothing about loaders or engine lifecycle.

Python 3.13+.
"""

from .cache import CacheEntry, TranslationCache
from .cache_config import CacheConfig
from .recovery import RecoveryStrategy
from .resolver import (
    FallbackInfo,
    MissingKeyHandler,
    ResolutionResult,
    TranslationResolver,
    lookup,
    resolve_snapshot,
)
from .tree import copy_tree, get_nested_value, interpolate, is_namespace_tree, split_key

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "FallbackInfo",
    "MissingKeyHandler",
    "RecoveryStrategy",
    "ResolutionResult",
    "TranslationCache",
    "TranslationResolver",
    "copy_tree",
    "get_nested_value",
    "interpolate",
    "is_namespace_tree",
    "lookup",
    "resolve_snapshot",
    "split_key",
]
