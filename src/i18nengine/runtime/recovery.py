"""Retry policy for dictionary loads.

A RecoveryStrategy decides whether a failed load is retried, how long to
wait before each retry, and which observers hear about retries and about
an exhausted retry budget.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from i18nengine.constants import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
)
from i18nengine.diagnostics import RECOVERABLE_CODES, TranslationError

__all__ = ["RecoveryStrategy"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecoveryStrategy:
    """Immutable retry policy for failed loads.

    Attributes:
        max_retries: Retries allowed after the first attempt (default: 3)
        retry_delay: Seconds before the first retry (default: 1.0)
        backoff_multiplier: Factor applied to the delay per retry (default: 2.0)
        should_retry: Custom retry predicate. None defers to
            TranslationError.is_recoverable.
        on_retry: Called with (error, attempt_number) before each wait.
            None logs a warning.
        on_max_retries_exceeded: Called once when the budget is spent.
            None logs an error.

    Exceptions raised by the hooks or the predicate are logged and never
    propagate; a failing predicate counts as "do not retry".

    Example:
        >>> strategy = RecoveryStrategy(retry_delay=0.5)
        >>> [strategy.delay_for(n) for n in (1, 2, 3)]
        [0.5, 1.0, 2.0]
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER
    should_retry: Callable[[TranslationError], bool] | None = None
    on_retry: Callable[[TranslationError, int], None] | None = None
    on_max_retries_exceeded: Callable[[TranslationError], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_retries or retry_delay is negative, or
                backoff_multiplier is below 1
        """
        if self.max_retries < 0:
            msg = "max_retries must be non-negative"
            raise ValueError(msg)
        if self.retry_delay < 0:
            msg = "retry_delay must be non-negative"
            raise ValueError(msg)
        if self.backoff_multiplier < 1:
            msg = "backoff_multiplier must be at least 1"
            raise ValueError(msg)

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (1-based)."""
        return self.retry_delay * self.backoff_multiplier ** (attempt - 1)

    def allows_retry(self, error: TranslationError) -> bool:
        """Decide whether ``error`` is retried.

        The retry budget always applies, even to a custom predicate.
        """
        if error.retry_count >= self.max_retries:
            return False
        if self.should_retry is not None:
            try:
                return bool(self.should_retry(error))
            except Exception:  # noqa: BLE001 - a faulty predicate stops retrying
                logger.exception(
                    "should_retry predicate failed for '%s:%s'", error.language, error.namespace
                )
                return False
        return error.is_recoverable

    def is_exhausted(self, error: TranslationError) -> bool:
        """True when a retryable kind of error has used the whole budget."""
        return error.code in RECOVERABLE_CODES and error.retry_count >= self.max_retries

    def notify_retry(self, error: TranslationError, attempt: int) -> None:
        """Report an upcoming retry."""
        if self.on_retry is not None:
            try:
                self.on_retry(error, attempt)
            except Exception:  # noqa: BLE001 - hook faults must not abort recovery
                logger.exception("on_retry hook failed for '%s:%s'", error.language, error.namespace)
            return
        logger.warning(
            "Retrying load of '%s:%s' (attempt %d/%d): %s",
            error.language,
            error.namespace,
            attempt,
            self.max_retries,
            error.message,
        )

    def notify_exhausted(self, error: TranslationError) -> None:
        """Report that the retry budget is spent."""
        if self.on_max_retries_exceeded is not None:
            try:
                self.on_max_retries_exceeded(error)
            except Exception:  # noqa: BLE001 - hook faults must not abort recovery
                logger.exception(
                    "on_max_retries_exceeded hook failed for '%s:%s'",
                    error.language,
                    error.namespace,
                )
            return
        logger.error(
            "Max retries exceeded loading '%s:%s': %s",
            error.language,
            error.namespace,
            error.message,
        )
