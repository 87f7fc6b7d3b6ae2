"""Load coordination for (language, namespace) dictionaries.

Sits between the engine and the caller-supplied loader:

- Cache: a live cache entry answers ensure_loaded() without a load
- Deduplication: at most one outstanding load per (language, namespace);
  concurrent callers await the same task and receive the same result
- Validation: a loader result that is not a namespace tree is a failure
- Recovery: recoverable failures are retried with exponential backoff;
  once retries are exhausted (or the failure is not recoverable) the same
  namespace is loaded once in the fallback language, and if that also
  fails the namespace becomes an empty tree

Load failures never propagate out of ensure_loaded(). They are reported to
the error handler, to the logger, and recorded as LoadResults.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from i18nengine.diagnostics import (
    ErrorLoggingConfig,
    ErrorTemplate,
    TranslationError,
    classify_load_error,
    log_translation_error,
)
from i18nengine.enums import LoadStatus
from i18nengine.localization.loading import LoadResult, LoadSummary
from i18nengine.runtime.recovery import RecoveryStrategy
from i18nengine.runtime.tree import is_namespace_tree

if TYPE_CHECKING:
    from i18nengine.localization.loading import TranslationLoader
    from i18nengine.localization.types import LanguageCode, NamespaceName, NamespaceTree
    from i18nengine.runtime.cache import TranslationCache

__all__ = ["ErrorHandler", "LoadCoordinator"]

logger = logging.getLogger(__name__)

type ErrorHandler = Callable[[TranslationError, str, str], None]
"""(error, language, namespace) -> None. Called for every load failure."""

type _Table = dict[LanguageCode, dict[NamespaceName, NamespaceTree]]


class LoadCoordinator:
    """Deduplicating, retrying loader front-end.

    Writes every completed load into both the cache store and the
    dictionary table it was given. Both are owned by the enclosing engine.

    Example:
        >>> coordinator = LoadCoordinator(loader, TranslationCache(), {})
        >>> tree = await coordinator.ensure_loaded("ko", "common")
    """

    __slots__ = (
        "_cache",
        "_debug",
        "_error_handler",
        "_fallback_language",
        "_in_flight",
        "_loader",
        "_logging",
        "_results",
        "_sleep",
        "_strategy",
        "_table",
    )

    def __init__(
        self,
        loader: TranslationLoader,
        cache: TranslationCache,
        table: _Table,
        *,
        fallback_language: LanguageCode | None = None,
        recovery: RecoveryStrategy | None = None,
        error_handler: ErrorHandler | None = None,
        logging_config: ErrorLoggingConfig | None = None,
        debug: bool = False,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ) -> None:
        """Initialize load coordinator.

        Args:
            loader: Caller-supplied loader
            cache: Cache store to consult and fill
            table: Dictionary table to fill
            fallback_language: Language loaded when the primary load fails
            recovery: Retry policy (default: RecoveryStrategy())
            error_handler: Called with (error, language, namespace) per failure
            logging_config: How failures are logged
            debug: Log successful loads at DEBUG level
            sleep: Awaitable delay used between retries (default: asyncio.sleep)
        """
        self._loader = loader
        self._cache = cache
        self._table = table
        self._fallback_language = fallback_language
        self._strategy = recovery or RecoveryStrategy()
        self._error_handler = error_handler
        self._logging = logging_config or ErrorLoggingConfig()
        self._debug = debug
        self._sleep = sleep or asyncio.sleep
        self._in_flight: dict[tuple[LanguageCode, NamespaceName], asyncio.Task[NamespaceTree]] = {}
        self._results: list[LoadResult] = []

    async def ensure_loaded(
        self, language: LanguageCode, namespace: NamespaceName
    ) -> NamespaceTree:
        """Return the tree for (language, namespace), loading it if needed.

        Idempotent and concurrency-safe: while a load for the pair is in
        flight, every caller awaits that same load.

        Returns:
            The loaded tree, fallback-language tree, or an empty tree
        """
        key = (language, namespace)
        task = self._in_flight.get(key)
        if task is None:
            cached = self._cache.get(language, namespace)
            if cached is not None:
                self._table.setdefault(language, {})[namespace] = cached
                return cached

            task = asyncio.ensure_future(self._load(language, namespace))
            self._in_flight[key] = task
            task.add_done_callback(lambda _: self._in_flight.pop(key, None))
        elif self._debug:
            logger.debug("Joining in-flight load for %s:%s", language, namespace)

        # Shield so a cancelled caller does not cancel the load for other joiners
        return await asyncio.shield(task)

    def is_loading(self, language: LanguageCode, namespace: NamespaceName) -> bool:
        """Check whether a load for the pair is in flight."""
        return (language, namespace) in self._in_flight

    def get_load_summary(self) -> LoadSummary:
        """Get summary of every load completed so far."""
        return LoadSummary(results=tuple(self._results))

    def reset(self) -> None:
        """Forget recorded load results.

        In-flight loads are left to complete.
        """
        self._results.clear()

    async def _call_loader(self, language: LanguageCode, namespace: NamespaceName) -> NamespaceTree:
        result: Any = self._loader(language, namespace)
        if inspect.isawaitable(result):
            result = await result
        if not is_namespace_tree(result):
            raise ErrorTemplate.malformed_tree(language, namespace, result)
        return result

    def _report(self, error: TranslationError, language: str, namespace: str) -> None:
        if self._error_handler is not None:
            try:
                self._error_handler(error, language, namespace)
            except Exception:  # noqa: BLE001 - handler faults must not abort recovery
                logger.exception("Error handler failed for %s:%s", language, namespace)

    def _store(
        self, language: LanguageCode, namespace: NamespaceName, tree: NamespaceTree
    ) -> NamespaceTree:
        self._cache.put(language, namespace, tree)
        self._table.setdefault(language, {})[namespace] = tree
        return tree

    async def _load(self, language: LanguageCode, namespace: NamespaceName) -> NamespaceTree:
        strategy = self._strategy
        retry_count = 0
        while True:
            try:
                tree = await self._call_loader(language, namespace)
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001 - every loader failure is classified
                error = classify_load_error(
                    exc,
                    language=language,
                    namespace=namespace,
                    retry_count=retry_count,
                    max_retries=strategy.max_retries,
                )
                self._report(error, language, namespace)
                if strategy.allows_retry(error):
                    retry_count += 1
                    strategy.notify_retry(error, retry_count)
                    await self._sleep(strategy.delay_for(retry_count))
                    continue
                if strategy.is_exhausted(error):
                    strategy.notify_exhausted(error)
                log_translation_error(error, self._logging)
                break
            else:
                if self._debug:
                    logger.debug("Loaded translations for %s:%s", language, namespace)
                self._results.append(
                    LoadResult(language, namespace, LoadStatus.SUCCESS, attempts=retry_count + 1)
                )
                return self._store(language, namespace, tree)

        return await self._recover(language, namespace, error, attempts=retry_count + 1)

    async def _recover(
        self,
        language: LanguageCode,
        namespace: NamespaceName,
        error: TranslationError,
        *,
        attempts: int,
    ) -> NamespaceTree:
        # Data already in the table (an expired entry that failed to
        # refresh) is kept over fallback or empty data.
        existing = self._table.get(language, {}).get(namespace)
        fallback = self._fallback_language
        fallback_error: TranslationError | None = None

        if existing is None and fallback and fallback != language:
            try:
                tree = await self._call_loader(fallback, namespace)
            except asyncio.CancelledError:
                raise
            except Exception as exc:  # noqa: BLE001 - fallback is a single attempt
                fallback_error = classify_load_error(
                    exc,
                    language=fallback,
                    namespace=namespace,
                    max_retries=self._strategy.max_retries,
                )
                self._report(fallback_error, fallback, namespace)
                log_translation_error(fallback_error, self._logging)
            else:
                logger.info(
                    "Using %s translations for %s:%s after load failure",
                    fallback,
                    language,
                    namespace,
                )
                self._results.append(
                    LoadResult(
                        language, namespace, LoadStatus.FALLBACK, attempts=attempts, error=error
                    )
                )
                return self._store(language, namespace, tree)

        self._results.append(
            LoadResult(
                language,
                namespace,
                LoadStatus.EMPTY if existing is None else LoadStatus.STALE,
                attempts=attempts,
                error=error,
                fallback_error=fallback_error,
            )
        )
        if existing is not None:
            logger.warning("Keeping stale translations for %s:%s", language, namespace)
            return existing

        logger.warning(
            "No translations available for %s:%s; using empty namespace", language, namespace
        )
        empty: NamespaceTree = {}
        self._table.setdefault(language, {})[namespace] = empty
        return empty
