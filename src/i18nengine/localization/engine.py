"""Translation engine: dictionaries, cache, and lookups for one configuration.

An engine owns a dictionary table, a cache store, a current-language
cursor and an initialization state. Loading is asynchronous; lookups are
synchronous and answer only from what has already been loaded.

Initialization Behavior:
    initialize() validates the configuration, then loads every configured
    namespace for the current language and for the fallback language
    (namespaces in order, the two languages concurrently). A namespace that
    cannot be loaded becomes an empty tree and the engine still reaches
    READY. Only a failure outside the per-namespace load path, such as an
    invalid configuration, moves the engine to FAILED; the error is kept
    for get_initialization_error() and lookups degrade to echoing keys.

        engine = TranslationEngine(config)
        await engine.initialize()
        engine.resolve("common.welcome")

Language switching:
    set_language() moves the cursor immediately. If the new language has
    not been loaded, a background load is scheduled on the running event
    loop; until it completes, lookups fall through the usual fallback chain.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from i18nengine.diagnostics import ErrorTemplate, TranslationError, log_translation_error
from i18nengine.enums import InitState
from i18nengine.localization.coordinator import LoadCoordinator
from i18nengine.runtime.cache import TranslationCache
from i18nengine.runtime.resolver import TranslationResolver
from i18nengine.runtime.tree import copy_tree, interpolate, split_key

if TYPE_CHECKING:
    from i18nengine.localization.config import I18nConfig, LanguageDescriptor
    from i18nengine.localization.loading import LoadSummary
    from i18nengine.localization.types import (
        LanguageCode,
        NamespaceName,
        NamespaceTree,
        TranslationKey,
        TranslationParams,
    )
    from i18nengine.runtime.resolver import ResolutionResult

__all__ = ["LanguageListener", "TranslationEngine"]

logger = logging.getLogger(__name__)

type LanguageListener = Callable[[str], None]
"""Called with the current language after a switch or a completed load."""


class TranslationEngine:
    """Localized string lookup for one configuration.

    Example:
        >>> engine = TranslationEngine(config)
        >>> await engine.initialize()
        >>> engine.resolve("common.welcome")
        '환영합니다'
        >>> engine.resolve_with_params("common.greeting", {"name": "Anna"})
        '안녕하세요, Anna님!'
        >>> engine.set_language("en")
        >>> await engine.ensure_language("en")
        >>> engine.resolve("common.welcome")
        'Welcome'

    Attributes:
        config: Immutable configuration the engine was built from
    """

    __slots__ = (
        "_background",
        "_cache",
        "_config",
        "_coordinator",
        "_current_language",
        "_init_task",
        "_initialization_error",
        "_listeners",
        "_resolver",
        "_state",
        "_table",
    )

    def __init__(
        self,
        config: I18nConfig,
        *,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ) -> None:
        """Create an uninitialized engine.

        Construction never loads and never raises for configuration
        problems; both happen in initialize().

        Args:
            config: Engine configuration
            clock: Monotonic time source for cache expiry (tests)
            sleep: Awaitable delay used between load retries (tests)
        """
        self._config = config
        self._table: dict[LanguageCode, dict[NamespaceName, NamespaceTree]] = {}
        self._cache = TranslationCache(config.cache, clock=clock)
        fallback = config.effective_fallback_language
        error_handling = config.error_handling
        self._coordinator = LoadCoordinator(
            config.load_translations,
            self._cache,
            self._table,
            fallback_language=fallback,
            recovery=error_handling.recovery_strategy,
            error_handler=config.error_handler,
            logging_config=error_handling.logging,
            debug=config.debug,
            sleep=sleep,
        )
        self._resolver = TranslationResolver(
            self._table,
            fallback_language=fallback,
            missing_key_handler=config.missing_key_handler,
            on_fallback=config.on_fallback,
            debug=config.debug,
        )
        self._current_language: LanguageCode = config.default_language
        self._state = InitState.UNINITIALIZED
        self._initialization_error: TranslationError | None = None
        self._init_task: asyncio.Task[None] | None = None
        self._background: set[asyncio.Task[None]] = set()
        self._listeners: list[LanguageListener] = []

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"TranslationEngine(language={self._current_language!r}, "
            f"state={self._state!s}, languages={len(self._table)})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self, *, strict: bool = False) -> None:
        """Load the current and fallback languages.

        Idempotent: once READY, further calls return immediately.
        Concurrent calls share one initialization.

        Args:
            strict: Raise the initialization error instead of only
                recording it

        Raises:
            TranslationError: INITIALIZATION_ERROR, only when strict=True
                and the engine ends in FAILED
        """
        if self._state is InitState.READY:
            return

        if self._init_task is None or self._init_task.done():
            self._init_task = asyncio.ensure_future(self._run_initialize())
        await asyncio.shield(self._init_task)

        if strict and self._initialization_error is not None:
            raise self._initialization_error

    async def _run_initialize(self) -> None:
        self._state = InitState.INITIALIZING
        language = self._current_language
        try:
            self._config.validate()
            languages = [language]
            fallback = self._config.effective_fallback_language
            if fallback != language:
                languages.append(fallback)
            await asyncio.gather(*(self._load_namespaces(lang) for lang in languages))
        except asyncio.CancelledError:
            self._state = InitState.UNINITIALIZED
            raise
        except Exception as exc:  # noqa: BLE001 - recorded, surfaced via get_initialization_error
            error = ErrorTemplate.initialization_failed(language, exc)
            self._initialization_error = error
            self._state = InitState.FAILED
            log_translation_error(error, self._config.error_handling.logging)
            if self._config.error_handler is not None:
                try:
                    self._config.error_handler(error, language, "initialization")
                except Exception:  # noqa: BLE001 - handler faults must not mask the error
                    logger.exception("Error handler failed during initialization")
            return

        self._initialization_error = None
        self._state = InitState.READY
        logger.info(
            "Translations ready: %s (namespaces: %s)",
            ", ".join(languages),
            ", ".join(self._config.namespaces),
        )

    async def _load_namespaces(self, language: LanguageCode) -> None:
        self._table.setdefault(language, {})
        for namespace in self._config.namespaces:
            await self._coordinator.ensure_loaded(language, namespace)

    async def ensure_loaded(
        self, language: LanguageCode, namespace: NamespaceName
    ) -> NamespaceTree:
        """Load one (language, namespace) pair if it is not cached.

        Concurrent calls for the same pair share a single loader call.
        Never raises for load failures; see LoadCoordinator.
        """
        return await self._coordinator.ensure_loaded(language, namespace)

    async def ensure_language(self, language: LanguageCode) -> None:
        """Load every configured namespace for a language.

        Listeners are notified when the language is the current one.
        """
        await self._load_namespaces(language)
        if language == self._current_language:
            self._notify()

    async def reload_all(self) -> None:
        """Drop all loaded data and initialize again.

        Reloads the current language (not necessarily the default one) and
        the fallback language.
        """
        self._cache.clear()
        self._table.clear()
        self._coordinator.reset()
        self._state = InitState.UNINITIALIZED
        self._initialization_error = None
        self._init_task = None
        await self.initialize()
        self._notify()

    def clear_cache(self) -> None:
        """Clear the cache store and its hit/miss counters.

        The dictionary table is kept, so lookups keep answering; the next
        ensure_loaded() for any pair goes back to the loader.
        """
        self._cache.clear()
        self._coordinator.reset()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def resolve(self, key: TranslationKey, language: LanguageCode | None = None) -> str:
        """Resolve a dotted key to a localized string.

        Never raises and never blocks. Before the engine is READY (or when
        initialization failed) the missing-key handler's output or the raw
        key is returned.

        Args:
            key: Dotted key; a key without '.' lives in the common namespace
            language: Target language (default: current language)

        Returns:
            Localized string, missing-key placeholder, or the key itself
        """
        target = language or self._current_language
        if self._state is not InitState.READY:
            return self._resolver.unresolved(key, target)
        return self._resolver.resolve(key, target).text

    def resolve_detailed(
        self, key: TranslationKey, language: LanguageCode | None = None
    ) -> ResolutionResult:
        """Resolve a key and report which dictionary answered.

        Unlike resolve(), answers from whatever is loaded even before READY.
        """
        return self._resolver.resolve(key, language or self._current_language)

    def resolve_with_params(
        self,
        key: TranslationKey,
        params: TranslationParams | None = None,
        language: LanguageCode | None = None,
    ) -> str:
        """Resolve a key and substitute {{placeholders}} from params.

        Placeholders without a (non-None) parameter are left verbatim.
        """
        return interpolate(self.resolve(key, language), params)

    async def resolve_async(
        self,
        key: TranslationKey,
        params: TranslationParams | None = None,
        language: LanguageCode | None = None,
    ) -> str:
        """Load the key's namespace if needed, then resolve and interpolate.

        Works for namespaces outside config.namespaces and before
        initialize(). The fallback language's namespace is loaded only when
        the target language misses. Load failures are handled as in
        ensure_loaded(); this method never raises for them.

        Example:
            >>> await engine.resolve_async("settings.title")
            '설정'
        """
        target = language or self._current_language
        if not key or not isinstance(key, str):
            return self._resolver.resolve(key, target).text

        namespace, _ = split_key(key)
        await self._coordinator.ensure_loaded(target, namespace)
        result = self._resolver.resolve(key, target)

        fallback = self._resolver.fallback_language
        if result.is_missing and fallback and fallback != target:
            await self._coordinator.ensure_loaded(fallback, namespace)
            result = self._resolver.resolve(key, target)
        return interpolate(result.text, params)

    # ------------------------------------------------------------------
    # Language cursor
    # ------------------------------------------------------------------

    def set_language(self, language: LanguageCode) -> None:
        """Switch the current language.

        The cursor moves immediately. Missing data for the new language is
        loaded in the background on the running event loop; without a
        running loop the load is left to ensure_language().
        """
        if not language or not isinstance(language, str):
            logger.warning("Invalid language: %r", language)
            return
        if language == self._current_language:
            return
        if self._config.supported_languages and self._config.get_language(language) is None:
            logger.warning("Language %r is not in supported_languages", language)

        self._current_language = language
        self._notify()

        if self._has_language(language):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; deferring load of %s", language)
            return
        task = loop.create_task(self.ensure_language(language))
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _has_language(self, language: LanguageCode) -> bool:
        loaded = self._table.get(language, {})
        return all(namespace in loaded for namespace in self._config.namespaces)

    def _on_background_done(self, task: asyncio.Task[None]) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background language load failed", exc_info=exc)

    def get_current_language(self) -> LanguageCode:
        """Get the current language."""
        return self._current_language

    def get_supported_languages(self) -> tuple[LanguageDescriptor, ...]:
        """Get configured languages in their configured order."""
        return self._config.supported_languages

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: LanguageListener) -> Callable[[], None]:
        """Register a listener for language switches and completed loads.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(self._current_language)
            except Exception:  # noqa: BLE001 - one listener must not break others
                logger.exception("Language listener failed")

    # ------------------------------------------------------------------
    # State and diagnostics
    # ------------------------------------------------------------------

    @property
    def config(self) -> I18nConfig:
        """Configuration the engine was built from."""
        return self._config

    @property
    def state(self) -> InitState:
        """Current initialization state."""
        return self._state

    def is_ready(self) -> bool:
        """Check whether initialization completed successfully."""
        return self._state is InitState.READY

    def get_initialization_error(self) -> TranslationError | None:
        """Get the error that moved the engine to FAILED, if any."""
        return self._initialization_error

    def get_cache_stats(self) -> dict[str, int]:
        """Get cache store statistics (size, hits, misses)."""
        return self._cache.get_stats()

    def get_load_summary(self) -> LoadSummary:
        """Get results of every load since creation, reload or cache clear."""
        return self._coordinator.get_load_summary()

    def get_loaded_languages(self) -> tuple[LanguageCode, ...]:
        """Languages with at least one namespace in the dictionary table."""
        return tuple(language for language, namespaces in self._table.items() if namespaces)

    def get_loaded_namespaces(self, language: LanguageCode | None = None) -> tuple[str, ...]:
        """Namespaces present in the dictionary table for a language.

        Args:
            language: Language to inspect (default: current language)
        """
        return tuple(self._table.get(language or self._current_language, {}))

    def get_all_translations(self) -> dict[str, dict[str, dict[str, object]]]:
        """Deep copy of the dictionary table."""
        return {
            language: {namespace: copy_tree(tree) for namespace, tree in namespaces.items()}
            for language, namespaces in self._table.items()
        }
