"""Error message templates.

Centralized constructors for the TranslationErrors the engine raises or
records itself, so messages stay consistent and testable.
Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from i18nengine.enums import ErrorCode

from .errors import TranslationError

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates."""

    @staticmethod
    def invalid_config(reason: str) -> TranslationError:
        """Configuration failed validation.

        Args:
            reason: Human-readable description of the problem

        Returns:
            TranslationError with code VALIDATION_ERROR
        """
        msg = f"Invalid i18n configuration: {reason}"
        return TranslationError(ErrorCode.VALIDATION_ERROR, msg, context={"reason": reason})

    @staticmethod
    def malformed_tree(language: str, namespace: str, received: object) -> TranslationError:
        """Loader returned something other than a namespace tree.

        Args:
            language: Language being loaded
            namespace: Namespace being loaded
            received: The offending value

        Returns:
            TranslationError with code VALIDATION_ERROR
        """
        msg = (
            f"Loader returned {type(received).__name__} for '{language}:{namespace}'; "
            "expected a mapping of string keys to strings or nested mappings"
        )
        return TranslationError(
            ErrorCode.VALIDATION_ERROR,
            msg,
            language=language,
            namespace=namespace,
        )

    @staticmethod
    def invalid_key(key: object, language: str) -> TranslationError:
        """Lookup key was empty or not a string."""
        msg = f"Invalid translation key: {key!r}"
        return TranslationError(ErrorCode.INVALID_KEY, msg, language=language)

    @staticmethod
    def missing_key(key: str, language: str, namespace: str) -> TranslationError:
        """Key absent from the whole lookup chain."""
        msg = f"Translation key '{key}' not found for language '{language}'"
        return TranslationError(
            ErrorCode.MISSING_KEY,
            msg,
            language=language,
            namespace=namespace,
            key=key,
        )

    @staticmethod
    def initialization_failed(language: str, cause: BaseException) -> TranslationError:
        """initialize() failed outside the per-namespace load path."""
        msg = f"Failed to initialize translations for '{language}': {cause}"
        return TranslationError(
            ErrorCode.INITIALIZATION_ERROR,
            msg,
            language=language,
            cause=cause,
        )
