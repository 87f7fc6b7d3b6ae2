"""Key resolution over a dictionary table.

Implements the lookup chain for dotted keys:

    1. target language, key's namespace
    2. fallback language, key's namespace (if configured and different)
    3. target language, common namespace (if the key's namespace is not common)
    4. missing-key handler, or the full key unchanged

Resolution is synchronous and answers strictly from the table it is given;
it never loads, never blocks and never raises for lookup failures.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from i18nengine.constants import COMMON_NAMESPACE
from i18nengine.diagnostics import ErrorTemplate
from i18nengine.enums import ResolutionSource
from i18nengine.runtime.tree import get_nested_value, interpolate, split_key

if TYPE_CHECKING:
    from i18nengine.localization.types import (
        DictionaryTable,
        LanguageCode,
        NamespaceName,
        TranslationKey,
        TranslationParams,
    )

__all__ = [
    "FallbackInfo",
    "MissingKeyHandler",
    "ResolutionResult",
    "TranslationResolver",
    "lookup",
    "resolve_snapshot",
]

logger = logging.getLogger(__name__)

type MissingKeyHandler = Callable[[str, str, str], str]
"""(full_key, language, namespace) -> replacement text."""


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a fallback resolution.

    Provided to the on_fallback callback when a key is answered by the
    fallback language or the common namespace instead of the target
    language's own namespace.

    Attributes:
        requested_language: Language the lookup targeted
        resolved_language: Language whose dictionary answered
        namespace: Namespace of the key
        resolved_namespace: Namespace whose dictionary answered
        key: Full dotted key
        source: FALLBACK or COMMON
    """

    requested_language: LanguageCode
    resolved_language: LanguageCode
    namespace: NamespaceName
    resolved_namespace: NamespaceName
    key: TranslationKey
    source: ResolutionSource


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome of a single key resolution.

    Attributes:
        text: Resolved string (or missing-key placeholder)
        language: Language the lookup targeted
        namespace: Namespace parsed from the key
        key: Full dotted key (namespace.path)
        source: Which step of the lookup chain answered
    """

    text: str
    language: LanguageCode
    namespace: NamespaceName
    key: TranslationKey
    source: ResolutionSource

    @property
    def is_fallback(self) -> bool:
        """True when the text did not come from the target namespace."""
        return self.source in (ResolutionSource.FALLBACK, ResolutionSource.COMMON)

    @property
    def is_missing(self) -> bool:
        """True when no dictionary contained the key."""
        return self.source is ResolutionSource.MISSING


def _leaf(table: DictionaryTable, language: LanguageCode, namespace: str, path: str) -> str | None:
    value = get_nested_value(table.get(language, {}).get(namespace), path)
    return value if isinstance(value, str) else None


def lookup(
    table: DictionaryTable,
    namespace: NamespaceName,
    path: str,
    language: LanguageCode,
    fallback_language: LanguageCode | None,
) -> tuple[str, ResolutionSource, LanguageCode, NamespaceName] | None:
    """Walk the lookup chain for one key.

    Only string leaves count as hits; a subtree at the path is a miss.

    Args:
        table: Dictionary table to read
        namespace: Key namespace
        path: In-namespace dotted path
        language: Target language
        fallback_language: Fallback language, or None

    Returns:
        (text, source, resolved_language, resolved_namespace), or None if
        the chain is exhausted
    """
    value = _leaf(table, language, namespace, path)
    if value is not None:
        return value, ResolutionSource.PRIMARY, language, namespace

    if fallback_language and fallback_language != language:
        value = _leaf(table, fallback_language, namespace, path)
        if value is not None:
            return value, ResolutionSource.FALLBACK, fallback_language, namespace

    if namespace != COMMON_NAMESPACE:
        value = _leaf(table, language, COMMON_NAMESPACE, path)
        if value is not None:
            return value, ResolutionSource.COMMON, language, COMMON_NAMESPACE

    return None


def _call_missing_handler(
    handler: MissingKeyHandler | None,
    full_key: str,
    language: LanguageCode,
    namespace: NamespaceName,
) -> str:
    if handler is None:
        return full_key
    try:
        return handler(full_key, language, namespace)
    except Exception:  # noqa: BLE001 - lookups never raise
        logger.exception("Missing-key handler failed for '%s'", full_key)
        return full_key


def resolve_snapshot(
    table: DictionaryTable,
    key: TranslationKey,
    language: LanguageCode,
    fallback_language: LanguageCode | None = None,
    missing_key_handler: MissingKeyHandler | None = None,
) -> str:
    """Resolve a key against a fully preloaded table without an engine.

    Applies the same lookup chain as TranslationResolver, with no cache and
    no state. Intended for server-side rendering before any engine exists.

    Example:
        >>> table = {"ko": {"common": {"hi": "안녕"}}, "en": {"common": {"hi": "Hi"}}}
        >>> resolve_snapshot(table, "hi", "ko", "en")
        '안녕'
        >>> resolve_snapshot(table, "common.bye", "ko", "en")
        'common.bye'
    """
    if not key or not isinstance(key, str):
        return ""
    namespace, path = split_key(key)
    hit = lookup(table, namespace, path, language, fallback_language)
    if hit is not None:
        return hit[0]
    return _call_missing_handler(
        missing_key_handler, f"{namespace}.{path}", language, namespace
    )


class TranslationResolver:
    """Resolves dotted keys against a live dictionary table.

    The table is owned by the engine and mutated as loads complete; the
    resolver only reads it.

    Example:
        >>> table = {"ko": {"common": {"welcome": "환영합니다"}}}
        >>> resolver = TranslationResolver(table, fallback_language="en")
        >>> resolver.resolve("common.welcome", "ko").text
        '환영합니다'
    """

    __slots__ = ("_debug", "_fallback_language", "_missing_key_handler", "_on_fallback", "_table")

    def __init__(
        self,
        table: Mapping[LanguageCode, Mapping[NamespaceName, object]],
        *,
        fallback_language: LanguageCode | None = None,
        missing_key_handler: MissingKeyHandler | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize resolver.

        Args:
            table: Dictionary table (language -> namespace -> tree)
            fallback_language: Language consulted when the target misses
            missing_key_handler: Produces text for keys absent everywhere
            on_fallback: Observer for fallback and common-namespace hits
            debug: Log every fallback resolution at DEBUG level
        """
        self._table = table
        self._fallback_language = fallback_language
        self._missing_key_handler = missing_key_handler
        self._on_fallback = on_fallback
        self._debug = debug

    def resolve(self, key: TranslationKey, language: LanguageCode) -> ResolutionResult:
        """Resolve a key for a target language.

        Args:
            key: Dotted key; a key without '.' lives in the common namespace
            language: Target language

        Returns:
            ResolutionResult; never raises for missing or malformed keys
        """
        if not key or not isinstance(key, str):
            error = ErrorTemplate.invalid_key(key, language)
            logger.warning("%s", error)
            return ResolutionResult("", language, "", "", ResolutionSource.MISSING)

        namespace, path = split_key(key)
        full_key = f"{namespace}.{path}"
        hit = lookup(self._table, namespace, path, language, self._fallback_language)

        if hit is None:
            if self._debug:
                logger.debug("Missing translation for key: %s (%s)", full_key, language)
            text = _call_missing_handler(self._missing_key_handler, full_key, language, namespace)
            return ResolutionResult(text, language, namespace, full_key, ResolutionSource.MISSING)

        text, source, resolved_language, resolved_namespace = hit
        if source is not ResolutionSource.PRIMARY:
            if self._debug:
                logger.debug(
                    "Fallback (%s): %s:%s -> %s:%s for key: %s",
                    source,
                    language,
                    namespace,
                    resolved_language,
                    resolved_namespace,
                    full_key,
                )
            if self._on_fallback is not None:
                info = FallbackInfo(
                    requested_language=language,
                    resolved_language=resolved_language,
                    namespace=namespace,
                    resolved_namespace=resolved_namespace,
                    key=full_key,
                    source=source,
                )
                try:
                    self._on_fallback(info)
                except Exception:  # noqa: BLE001 - lookups never raise
                    logger.exception("on_fallback callback failed for '%s'", full_key)
        return ResolutionResult(text, language, namespace, full_key, source)

    def resolve_with_params(
        self,
        key: TranslationKey,
        params: TranslationParams | None,
        language: LanguageCode,
    ) -> str:
        """Resolve a key and substitute {{placeholders}} from params."""
        return interpolate(self.resolve(key, language).text, params)

    def unresolved(self, key: object, language: LanguageCode) -> str:
        """Text for lookups made before the dictionaries are ready.

        Delegates to the missing-key handler with the raw key and an empty
        namespace, or echoes the key.
        """
        if not key or not isinstance(key, str):
            return ""
        return _call_missing_handler(self._missing_key_handler, key, language, "")

    @property
    def fallback_language(self) -> LanguageCode | None:
        """Language consulted when the target language misses."""
        return self._fallback_language
