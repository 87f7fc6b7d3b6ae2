"""Locale utilities backed by Babel's CLDR data.

Language codes in configurations are plain strings (e.g. "ko", "en",
"pt-BR"). Lookups never interpret them; these helpers exist for building
language descriptors and for callers that want canonical codes.

Python 3.13+.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_display_names",
    "normalize_locale",
]


def normalize_locale(language: str) -> str:
    """Convert a BCP-47 language code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        language: BCP-47 language code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("ko")
        'ko'
    """
    return language.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(language: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        language: Language code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If the language is not in CLDR
        ValueError: If the code is malformed
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(language))


def get_display_names(language: str, *, display_locale: str = "en") -> tuple[str, str]:
    """Return (display_name, native_name) for a language code.

    The display name is rendered in ``display_locale``; the native name is
    rendered in the language itself.

    Args:
        language: Language code to describe
        display_locale: Language the display name is written in

    Returns:
        Tuple of (display_name, native_name)

    Raises:
        babel.core.UnknownLocaleError: If either code is not in CLDR
        ValueError: If either code is malformed

    Example:
        >>> get_display_names("ko")
        ('Korean', '한국어')
    """
    locale = get_babel_locale(language)
    display = locale.get_display_name(get_babel_locale(display_locale)) or language
    native = locale.get_display_name() or display
    return display, native
