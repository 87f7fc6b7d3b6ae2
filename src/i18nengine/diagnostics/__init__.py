"""Diagnostic system for translation errors.

Provides the TranslationError type, load-failure classification,
user-facing descriptions, and structured logging.

Python 3.13+. Zero external dependencies.
"""

from .errors import RECOVERABLE_CODES, TranslationError, classify_load_error
from .messages import UserFriendlyError, describe_error
from .reporting import ErrorLoggingConfig, LogLevel, log_translation_error
from .templates import ErrorTemplate

__all__ = [
    "RECOVERABLE_CODES",
    "ErrorLoggingConfig",
    "ErrorTemplate",
    "LogLevel",
    "TranslationError",
    "UserFriendlyError",
    "classify_load_error",
    "describe_error",
    "log_translation_error",
]
