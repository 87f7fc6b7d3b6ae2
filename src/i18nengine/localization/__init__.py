"""Multi-language localization package.

Provides the full localization stack: type aliases, configuration, loader
infrastructure, load coordination, the engine, and the instance registry.

Submodules:
    types       - PEP 695 type aliases (LanguageCode, NamespaceTree, ...)
    config      - I18nConfig, LanguageDescriptor, presets
    loading     - TranslationLoader protocol, JsonFileLoader, LoadResult, LoadSummary
    coordinator - LoadCoordinator (dedup, retry, fallback)
    engine      - TranslationEngine (state machine and lookups)
    registry    - EngineRegistry (fingerprint-keyed instances)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18nengine.enums import InitState, LoadStatus
from i18nengine.localization.config import (
    DEFAULT_LANGUAGES,
    ErrorHandlingConfig,
    I18nConfig,
    LanguageDescriptor,
    create_dev_config,
    create_simple_config,
)
from i18nengine.localization.coordinator import ErrorHandler, LoadCoordinator
from i18nengine.localization.engine import LanguageListener, TranslationEngine
from i18nengine.localization.loading import (
    JsonFileLoader,
    LoadResult,
    LoadSummary,
    TranslationLoader,
)
from i18nengine.localization.registry import EngineRegistry, default_registry
from i18nengine.localization.types import (
    DictionaryTable,
    LanguageCode,
    NamespaceName,
    NamespaceTree,
    TranslationKey,
    TranslationParams,
)

__all__ = [
    # Engine and registry
    "TranslationEngine",
    "EngineRegistry",
    "default_registry",
    "InitState",
    "LanguageListener",
    # Configuration
    "I18nConfig",
    "LanguageDescriptor",
    "ErrorHandlingConfig",
    "DEFAULT_LANGUAGES",
    "create_dev_config",
    "create_simple_config",
    # Loading
    "TranslationLoader",
    "JsonFileLoader",
    "LoadCoordinator",
    "ErrorHandler",
    "LoadStatus",
    "LoadResult",
    "LoadSummary",
    # Type aliases for user code type annotations
    "DictionaryTable",
    "LanguageCode",
    "NamespaceName",
    "NamespaceTree",
    "TranslationKey",
    "TranslationParams",
]
