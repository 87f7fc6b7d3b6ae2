"""Engine configuration.

Frozen dataclasses describing everything an engine needs: languages,
namespaces, the loader, observer hooks, cache and recovery settings.
Configuration is validated when the engine initializes, so an invalid
configuration yields a failed engine rather than a constructor error.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from i18nengine.constants import COMMON_NAMESPACE, MISSING_KEY_TEMPLATE
from i18nengine.diagnostics import ErrorLoggingConfig, ErrorTemplate, TranslationError
from i18nengine.enums import Formality, Tone
from i18nengine.locale_utils import get_display_names
from i18nengine.runtime.cache_config import CacheConfig
from i18nengine.runtime.recovery import RecoveryStrategy

if TYPE_CHECKING:
    from i18nengine.localization.coordinator import ErrorHandler
    from i18nengine.localization.loading import TranslationLoader
    from i18nengine.localization.types import LanguageCode, NamespaceName
    from i18nengine.runtime.resolver import FallbackInfo, MissingKeyHandler

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "ErrorHandlingConfig",
    "I18nConfig",
    "LanguageDescriptor",
    # Presets
    "DEFAULT_LANGUAGES",
    "create_dev_config",
    "create_simple_config",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageDescriptor:
    """A supported language, for listing in language pickers.

    Attributes:
        code: Language code used for lookups
        display_name: Name in the application's UI language (e.g., "Korean")
        native_name: Name in the language itself (e.g., "한국어")
        tone: Optional tone metadata for copywriting
        formality: Optional formality metadata for copywriting
    """

    code: LanguageCode
    display_name: str
    native_name: str
    tone: Tone | None = None
    formality: Formality | None = None

    def __post_init__(self) -> None:
        """Validate the code.

        Raises:
            ValueError: If code is empty or has surrounding whitespace
        """
        if not self.code or self.code.strip() != self.code:
            msg = f"Invalid language code: {self.code!r}"
            raise ValueError(msg)

    @classmethod
    def from_code(
        cls,
        code: LanguageCode,
        *,
        display_locale: str = "en",
        tone: Tone | None = None,
        formality: Formality | None = None,
    ) -> LanguageDescriptor:
        """Build a descriptor with names taken from CLDR.

        Raises:
            babel.core.UnknownLocaleError: If code is not a CLDR locale

        Example:
            >>> LanguageDescriptor.from_code("ko").native_name
            '한국어'
        """
        display_name, native_name = get_display_names(code, display_locale=display_locale)
        return cls(code, display_name, native_name, tone=tone, formality=formality)


DEFAULT_LANGUAGES: tuple[LanguageDescriptor, ...] = (
    LanguageDescriptor("ko", "Korean", "한국어"),
    LanguageDescriptor("en", "English", "English"),
)


@dataclass(frozen=True, slots=True)
class ErrorHandlingConfig:
    """Load recovery and error logging settings.

    Attributes:
        recovery_strategy: Retry policy for failed loads
        logging: How failures are logged
    """

    recovery_strategy: RecoveryStrategy = field(default_factory=RecoveryStrategy)
    logging: ErrorLoggingConfig = field(default_factory=ErrorLoggingConfig)


@dataclass(frozen=True, slots=True)
class I18nConfig:
    """Immutable engine configuration.

    Attributes:
        default_language: Language selected when the engine is created
        load_translations: Loader for (language, namespace) trees
        fallback_language: Language consulted on misses. Defaults to
            default_language, which disables language fallback.
        supported_languages: Ordered languages for UI listing
        namespaces: Namespaces loaded eagerly (default: ("common",))
        debug: Log fallbacks and loads at DEBUG level
        missing_key_handler: (full_key, language, namespace) -> text
        error_handler: (error, language, namespace) -> None, per load failure
        on_fallback: Observer for fallback resolutions
        cache: Cache store configuration
        error_handling: Retry and logging configuration

    Example:
        >>> config = I18nConfig(
        ...     default_language="ko",
        ...     fallback_language="en",
        ...     load_translations=loader,
        ...     namespaces=("common", "auth"),
        ... )
        >>> config.fingerprint
        'ko|en|common,auth|prod'
    """

    default_language: LanguageCode
    load_translations: TranslationLoader
    fallback_language: LanguageCode | None = None
    supported_languages: tuple[LanguageDescriptor, ...] = ()
    namespaces: tuple[NamespaceName, ...] = (COMMON_NAMESPACE,)
    debug: bool = False
    missing_key_handler: MissingKeyHandler | None = None
    error_handler: ErrorHandler | None = None
    on_fallback: Callable[[FallbackInfo], None] | None = None
    cache: CacheConfig = field(default_factory=CacheConfig)
    error_handling: ErrorHandlingConfig = field(default_factory=ErrorHandlingConfig)

    def __post_init__(self) -> None:
        # Accept any iterable for the sequence fields; store tuples.
        if not isinstance(self.namespaces, tuple):
            object.__setattr__(self, "namespaces", tuple(self.namespaces))
        if not isinstance(self.supported_languages, tuple):
            object.__setattr__(self, "supported_languages", tuple(self.supported_languages))

    @property
    def effective_fallback_language(self) -> LanguageCode:
        """Fallback language, or the default language when unset."""
        return self.fallback_language or self.default_language

    @property
    def fingerprint(self) -> str:
        """Identity used by EngineRegistry to decide instance reuse.

        Built from the default language, the effective fallback language,
        the namespaces in order, and the debug flag.
        """
        return "|".join((
            self.default_language,
            self.effective_fallback_language,
            ",".join(self.namespaces),
            "debug" if self.debug else "prod",
        ))

    def validate(self) -> None:
        """Check the configuration for problems.

        Raises:
            TranslationError: VALIDATION_ERROR describing the first problem
        """
        if not isinstance(self.default_language, str) or not self.default_language.strip():
            raise ErrorTemplate.invalid_config("default_language must be a non-empty string")
        if self.fallback_language is not None and not self.fallback_language.strip():
            raise ErrorTemplate.invalid_config("fallback_language must be non-empty when set")
        if not callable(self.load_translations):
            raise ErrorTemplate.invalid_config("load_translations must be callable")
        if not self.namespaces:
            raise ErrorTemplate.invalid_config("at least one namespace is required")

        seen_namespaces: set[str] = set()
        for namespace in self.namespaces:
            if not isinstance(namespace, str) or not namespace or "." in namespace:
                raise ErrorTemplate.invalid_config(
                    f"namespace names must be non-empty and contain no '.': {namespace!r}"
                )
            if namespace in seen_namespaces:
                raise ErrorTemplate.invalid_config(f"duplicate namespace: {namespace!r}")
            seen_namespaces.add(namespace)

        codes = [language.code for language in self.supported_languages]
        if len(codes) != len(set(codes)):
            raise ErrorTemplate.invalid_config("duplicate supported language codes")
        if codes and self.default_language not in codes:
            raise ErrorTemplate.invalid_config(
                f"default_language {self.default_language!r} is not a supported language"
            )

    def is_valid(self) -> bool:
        """Check the configuration without raising."""
        try:
            self.validate()
        except TranslationError:
            return False
        return True

    def get_language(self, code: LanguageCode) -> LanguageDescriptor | None:
        """Look up a supported language by code."""
        for language in self.supported_languages:
            if language.code == code:
                return language
        return None


def create_simple_config(
    default_language: LanguageCode,
    load_translations: TranslationLoader,
    *,
    fallback_language: LanguageCode | None = None,
    namespaces: Iterable[NamespaceName] = (COMMON_NAMESPACE,),
    debug: bool = False,
) -> I18nConfig:
    """Build a configuration with Korean and English as supported languages.

    Example:
        >>> config = create_simple_config("ko", loader, fallback_language="en")
        >>> [language.code for language in config.supported_languages]
        ['ko', 'en']
    """
    return I18nConfig(
        default_language=default_language,
        load_translations=load_translations,
        fallback_language=fallback_language,
        supported_languages=DEFAULT_LANGUAGES,
        namespaces=tuple(namespaces),
        debug=debug,
    )


def _dev_missing_key(key: str, language: str, namespace: str) -> str:
    logger.warning("Missing translation key: %s (%s)", key, language)
    return MISSING_KEY_TEMPLATE.format(key=key)


def _dev_error_handler(error: TranslationError, language: str, namespace: str) -> None:
    logger.error("Translation error for %s:%s: %s", language, namespace, error)


def create_dev_config(config: I18nConfig) -> I18nConfig:
    """Return a development variant of config.

    Turns on debug logging, renders missing keys as ``[MISSING: key]`` and
    logs every load failure at ERROR level.
    """
    return replace(
        config,
        debug=True,
        missing_key_handler=_dev_missing_key,
        error_handler=_dev_error_handler,
    )
