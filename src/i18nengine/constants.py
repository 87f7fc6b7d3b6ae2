"""Shared constants for I18nEngine.

Centralizes defaults used across the runtime and localization packages.
Placing them here avoids circular imports between the cache, the load
coordinator and the configuration layer.

Constants are grouped by domain:
- Namespaces: Key splitting and the shared namespace
- Cache: Time-to-live for loaded dictionaries
- Retry: Defaults for the load recovery strategy
- Interpolation: Placeholder syntax

Python 3.13+. Zero external dependencies.
"""

import re

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Namespaces
    "COMMON_NAMESPACE",
    "KEY_SEPARATOR",
    # Cache
    "DEFAULT_CACHE_TTL",
    # Retry
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_BACKOFF_MULTIPLIER",
    # Interpolation
    "PLACEHOLDER_PATTERN",
    # Fallback strings
    "MISSING_KEY_TEMPLATE",
]

# ============================================================================
# NAMESPACES
# ============================================================================

# Keys without a separator resolve inside this namespace, and it is the last
# namespace consulted before the missing-key handler.
COMMON_NAMESPACE: str = "common"

KEY_SEPARATOR: str = "."

# ============================================================================
# CACHE
# ============================================================================

# 24 hours, in seconds.
DEFAULT_CACHE_TTL: float = 24 * 60 * 60.0

# ============================================================================
# RETRY
# ============================================================================

DEFAULT_MAX_RETRIES: int = 3

# Seconds before the first retry; later retries multiply by the backoff.
DEFAULT_RETRY_DELAY: float = 1.0

DEFAULT_BACKOFF_MULTIPLIER: float = 2.0

# ============================================================================
# INTERPOLATION
# ============================================================================

# {{identifier}} placeholders. Identifiers are word characters only.
PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{\{(\w+)\}\}")

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendering used by development configurations for unresolved keys.
MISSING_KEY_TEMPLATE: str = "[MISSING: {key}]"
