"""User-facing descriptions of translation errors.

Maps each ErrorCode to a short message, a suggestion, a recovery action,
and a severity, for surfaces that show load problems to end users.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from i18nengine.enums import ErrorCode, Severity

from .errors import TranslationError

__all__ = ["UserFriendlyError", "describe_error"]


@dataclass(frozen=True, slots=True)
class UserFriendlyError:
    """Presentation-ready description of an error kind.

    Attributes:
        code: Error kind being described
        message: One-line explanation
        suggestion: What the user can check
        action: Recovery action label
        severity: How serious the failure is
    """

    code: ErrorCode
    message: str
    suggestion: str
    action: str
    severity: Severity


_DESCRIPTIONS = MappingProxyType({
    ErrorCode.MISSING_KEY: UserFriendlyError(
        ErrorCode.MISSING_KEY,
        "Translation key not found",
        "Check that the key exists in the translation files",
        "Update translation files",
        Severity.LOW,
    ),
    ErrorCode.LOAD_FAILED: UserFriendlyError(
        ErrorCode.LOAD_FAILED,
        "Failed to load translation file",
        "Check the network connection and the file path",
        "Retry",
        Severity.MEDIUM,
    ),
    ErrorCode.INVALID_KEY: UserFriendlyError(
        ErrorCode.INVALID_KEY,
        "Invalid translation key format",
        'Write keys as "namespace.key"',
        "Fix key format",
        Severity.LOW,
    ),
    ErrorCode.NETWORK_ERROR: UserFriendlyError(
        ErrorCode.NETWORK_ERROR,
        "A network error occurred",
        "Check the internet connection and try again",
        "Retry",
        Severity.HIGH,
    ),
    ErrorCode.INITIALIZATION_ERROR: UserFriendlyError(
        ErrorCode.INITIALIZATION_ERROR,
        "Failed to initialize translations",
        "Check the configuration and reload",
        "Reload",
        Severity.CRITICAL,
    ),
    ErrorCode.VALIDATION_ERROR: UserFriendlyError(
        ErrorCode.VALIDATION_ERROR,
        "Configuration validation failed",
        "Check the translation configuration",
        "Fix configuration",
        Severity.MEDIUM,
    ),
    ErrorCode.CACHE_ERROR: UserFriendlyError(
        ErrorCode.CACHE_ERROR,
        "A cache error occurred",
        "Clear the cache and try again",
        "Clear cache",
        Severity.LOW,
    ),
})


def describe_error(error: TranslationError | ErrorCode) -> UserFriendlyError:
    """Return the user-facing description for an error or error kind.

    Example:
        >>> describe_error(ErrorCode.NETWORK_ERROR).severity
        <Severity.HIGH: 'high'>
    """
    code = error.code if isinstance(error, TranslationError) else error
    return _DESCRIPTIONS[code]
