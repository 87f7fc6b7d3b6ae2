"""Translation error type and load-failure classification.

Every failure the engine observes is normalized to a TranslationError
carrying the (language, namespace, key) it concerns, its retry budget, and
the underlying cause. Lookups never raise these; they are routed to the
configured error handler, the logger, and the initialization-error slot.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from i18nengine.constants import DEFAULT_MAX_RETRIES
from i18nengine.enums import ErrorCode

__all__ = [
    "RECOVERABLE_CODES",
    "TranslationError",
    "classify_load_error",
]

RECOVERABLE_CODES: frozenset[ErrorCode] = frozenset(
    (ErrorCode.LOAD_FAILED, ErrorCode.NETWORK_ERROR, ErrorCode.CACHE_ERROR)
)


class TranslationError(Exception):
    """Base exception for all I18nEngine errors.

    Attributes:
        code: Error kind
        language: Language the failure concerns (None if not applicable)
        namespace: Namespace the failure concerns (None if not applicable)
        key: Lookup key the failure concerns (None if not applicable)
        retry_count: Retries already spent on the operation
        max_retries: Retry budget for the operation
        timestamp: Wall-clock time of creation (time.time())
        cause: Underlying exception, if any
        context: Free-form diagnostic context
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        language: str | None = None,
        namespace: str | None = None,
        key: str | None = None,
        retry_count: int = 0,
        max_retries: int = DEFAULT_MAX_RETRIES,
        cause: BaseException | None = None,
        context: Mapping[str, Any] | None = None,
        timestamp: float | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.language = language
        self.namespace = namespace
        self.key = key
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.cause = cause
        self.context: dict[str, Any] = dict(context) if context else {}
        self.timestamp = time.time() if timestamp is None else timestamp
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"TranslationError(code={self.code!s}, message={self.message!r}, "
            f"language={self.language!r}, namespace={self.namespace!r}, "
            f"retry_count={self.retry_count}/{self.max_retries})"
        )

    @property
    def is_recoverable(self) -> bool:
        """Whether another retry is allowed.

        Only LOAD_FAILED, NETWORK_ERROR and CACHE_ERROR are retried, and
        only while the retry budget is not spent.
        """
        return self.code in RECOVERABLE_CODES and self.retry_count < self.max_retries

    def with_retry(self, retry_count: int) -> TranslationError:
        """Return a copy of this error with a different retry count.

        The original timestamp is preserved.
        """
        return TranslationError(
            self.code,
            self.message,
            language=self.language,
            namespace=self.namespace,
            key=self.key,
            retry_count=retry_count,
            max_retries=self.max_retries,
            cause=self.cause,
            context=self.context,
            timestamp=self.timestamp,
        )

    def to_dict(self, *, include_context: bool = True) -> dict[str, Any]:
        """Structured representation for log records."""
        data: dict[str, Any] = {
            "code": str(self.code),
            "message": self.message,
            "timestamp": self.timestamp,
            "retry_count": self.retry_count,
            "max_retries": self.max_retries,
        }
        if include_context:
            data["language"] = self.language
            data["namespace"] = self.namespace
            data["key"] = self.key
            data["context"] = self.context
        return data


def classify_load_error(
    error: BaseException,
    *,
    language: str,
    namespace: str,
    retry_count: int = 0,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> TranslationError:
    """Normalize an exception raised by a loader to a TranslationError.

    Classification:
        TranslationError   -> kind preserved, location and budget filled in
        ConnectionError    -> NETWORK_ERROR
        TimeoutError       -> NETWORK_ERROR
        anything else      -> LOAD_FAILED

    Args:
        error: Exception raised while loading
        language: Language being loaded
        namespace: Namespace being loaded
        retry_count: Retries already spent
        max_retries: Retry budget

    Returns:
        TranslationError describing the failure
    """
    match error:
        case TranslationError():
            return TranslationError(
                error.code,
                error.message,
                language=error.language or language,
                namespace=error.namespace or namespace,
                key=error.key,
                retry_count=retry_count,
                max_retries=max_retries,
                cause=error.cause,
                context=error.context,
            )
        case ConnectionError() | TimeoutError():
            code = ErrorCode.NETWORK_ERROR
        case _:
            code = ErrorCode.LOAD_FAILED

    return TranslationError(
        code,
        f"Failed to load '{language}:{namespace}': {error}",
        language=language,
        namespace=namespace,
        retry_count=retry_count,
        max_retries=max_retries,
        cause=error,
    )
