"""I18nEngine - dotted-key translation lookup with fallback chains.

Resolves keys such as ``auth.login.title`` to localized strings from
asynchronously loaded per-(language, namespace) dictionaries, with a
fallback language, a shared ``common`` namespace, a TTL cache, and
retry/backoff around dictionary loading.

Public API:
    TranslationEngine - Loads dictionaries and answers lookups for one configuration
    EngineRegistry - Shares engines between identical configurations
    I18nConfig - Engine configuration
    LanguageDescriptor - Supported language metadata
    JsonFileLoader - Loader for translations/<language>/<namespace>.json files
    resolve_snapshot - Stateless lookup over a preloaded dictionary table

Exceptions:
    TranslationError - Base exception class (carries an ErrorCode)

Submodules:
    i18nengine.localization - Engine, configuration, loaders, registry
    i18nengine.runtime - Cache store, resolver, tree helpers, retry policy
    i18nengine.diagnostics - Error types, descriptions and logging
"""

from .diagnostics import TranslationError
from .enums import ErrorCode, InitState
from .localization import (
    EngineRegistry,
    I18nConfig,
    JsonFileLoader,
    LanguageDescriptor,
    TranslationEngine,
    create_dev_config,
    create_simple_config,
    default_registry,
)
from .runtime import CacheConfig, RecoveryStrategy, resolve_snapshot

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CacheConfig",
    "EngineRegistry",
    "ErrorCode",
    "I18nConfig",
    "InitState",
    "JsonFileLoader",
    "LanguageDescriptor",
    "RecoveryStrategy",
    "TranslationEngine",
    "TranslationError",
    "__version__",
    "create_dev_config",
    "create_simple_config",
    "default_registry",
    "resolve_snapshot",
]
