"""Dictionary loading infrastructure.

Provides the protocol for dictionary loaders, a JSON filesystem
implementation with path-traversal protection, and result/summary data
structures for tracking load attempts.

Components:
    TranslationLoader - Protocol for loading namespace trees (structural typing)
    JsonFileLoader - Disk-based JSON loader with path-traversal prevention
    LoadResult - Immutable result of one (language, namespace) load
    LoadSummary - Immutable aggregate of load results

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from i18nengine.enums import LoadStatus

if TYPE_CHECKING:
    from i18nengine.diagnostics import TranslationError
    from i18nengine.localization.types import LanguageCode, NamespaceName

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TranslationLoader",
    # Concrete loader
    "JsonFileLoader",
    # Load result types
    "LoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class TranslationLoader(Protocol):
    """Protocol for loading one namespace of one language.

    Any callable taking (language, namespace) and returning an awaitable of
    a namespace tree satisfies it, so a plain ``async def`` works:

        >>> async def load(language: str, namespace: str) -> dict:
        ...     return {"welcome": "Welcome"}

    A loader that wants missing namespaces to be silently empty returns
    ``{}``; a loader that raises hands the failure to the engine's retry
    and fallback policy.
    """

    def __call__(self, language: LanguageCode, namespace: NamespaceName) -> Awaitable[Any]:
        """Load the namespace tree for language."""
        ...


@dataclass(frozen=True, slots=True)
class JsonFileLoader:
    """File system loader reading ``<base_path>/<namespace>.json``.

    Uses a {language} placeholder in the path template. Files are read off
    the event loop with asyncio.to_thread.

    Security:
        Language codes containing path separators or ".." are rejected.
        Namespaces containing separators, ".." or leading dots are rejected.
        All resolved paths are validated against a fixed root directory.

    Example:
        >>> loader = JsonFileLoader("translations/{language}")
        >>> tree = await loader("ko", "common")
        # Loads from: translations/ko/common.json

    Attributes:
        base_path: Path template with {language} placeholder
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of base_path.
        missing_ok: Resolve a missing file to {} instead of raising
    """

    base_path: str
    root_dir: str | None = None
    missing_ok: bool = True
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate template at initialization.

        Raises:
            ValueError: If base_path does not contain {language} placeholder
        """
        if "{language}" not in self.base_path:
            msg = (
                f"base_path must contain '{{language}}' placeholder, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{language}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_segment(kind: str, value: str) -> None:
        if not value:
            msg = f"{kind} cannot be empty"
            raise ValueError(msg)
        if ".." in value:
            msg = f"Path traversal sequences not allowed in {kind}: '{value}'"
            raise ValueError(msg)
        if "/" in value or "\\" in value:
            msg = f"Path separators not allowed in {kind}: '{value}'"
            raise ValueError(msg)
        if value.startswith("."):
            msg = f"Leading dot not allowed in {kind}: '{value}'"
            raise ValueError(msg)

    def describe_path(self, language: LanguageCode, namespace: NamespaceName) -> str:
        """Return the file path a load would read, for diagnostics."""
        return f"{self.base_path.replace('{language}', language)}/{namespace}.json"

    def _resolve_path(self, language: LanguageCode, namespace: NamespaceName) -> Path:
        self._validate_segment("language", language)
        self._validate_segment("namespace", namespace)

        full_path = Path(self.describe_path(language, namespace)).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"language='{language}', namespace='{namespace}'"
            )
            raise ValueError(msg) from None
        return full_path

    def _read(self, path: Path) -> Any:
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if not self.missing_ok:
                raise
            logger.debug("Translation file not found, using empty namespace: %s", path)
            return {}
        return json.loads(text)

    async def __call__(self, language: LanguageCode, namespace: NamespaceName) -> Any:
        """Load and parse the JSON file for (language, namespace).

        Raises:
            ValueError: If language or namespace is unsafe, or JSON is invalid
            FileNotFoundError: If the file is missing and missing_ok is False
            OSError: If the file cannot be read
        """
        path = self._resolve_path(language, namespace)
        return await asyncio.to_thread(self._read, path)


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Result of loading one (language, namespace) pair.

    Attributes:
        language: Language that was requested
        namespace: Namespace that was requested
        status: SUCCESS, FALLBACK, EMPTY or STALE
        attempts: Loader invocations spent on the primary language
        error: Last primary-load error, None on success
        fallback_error: Fallback-load error, if a fallback was tried and failed
    """

    language: LanguageCode
    namespace: NamespaceName
    status: LoadStatus
    attempts: int = 1
    error: TranslationError | None = None
    fallback_error: TranslationError | None = None

    @property
    def is_success(self) -> bool:
        """Check if the primary load succeeded."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_fallback(self) -> bool:
        """Check if fallback-language data was used."""
        return self.status == LoadStatus.FALLBACK

    @property
    def is_empty(self) -> bool:
        """Check if both loads failed and the namespace is empty."""
        return self.status == LoadStatus.EMPTY

    @property
    def is_stale(self) -> bool:
        """Check if a refresh failed and earlier data was kept."""
        return self.status == LoadStatus.STALE


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of load results.

    Attributes:
        results: All individual load results (immutable tuple)

    Example:
        >>> summary = engine.get_load_summary()
        >>> if summary.has_failures:
        ...     for result in summary.get_failed():
        ...         print(f"Failed: {result.language}:{result.namespace}: {result.error}")
    """

    results: tuple[LoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"fallback={self.fallbacks}, "
            f"empty={self.empty}, "
            f"stale={self.stale})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of loads."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful primary loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def fallbacks(self) -> int:
        """Number of loads answered by the fallback language."""
        return sum(1 for r in self.results if r.is_fallback)

    @property
    def empty(self) -> int:
        """Number of loads that ended with an empty namespace."""
        return sum(1 for r in self.results if r.is_empty)

    @property
    def stale(self) -> int:
        """Number of failed refreshes that kept earlier data."""
        return sum(1 for r in self.results if r.is_stale)

    @property
    def total_retries(self) -> int:
        """Retries spent across all loads."""
        return sum(r.attempts - 1 for r in self.results)

    @property
    def has_failures(self) -> bool:
        """Check if any primary load failed."""
        return any(not r.is_success for r in self.results)

    @property
    def all_successful(self) -> bool:
        """Check if every primary load succeeded."""
        return not self.has_failures

    def get_failed(self) -> tuple[LoadResult, ...]:
        """Get all results whose primary load failed."""
        return tuple(r for r in self.results if not r.is_success)

    def get_by_language(self, language: LanguageCode) -> tuple[LoadResult, ...]:
        """Get all results for a specific language."""
        return tuple(r for r in self.results if r.language == language)
