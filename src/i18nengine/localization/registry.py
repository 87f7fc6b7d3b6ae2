"""Engine instances keyed by configuration fingerprint.

Repeated construction with an unchanged configuration (same default
language, fallback language, namespaces and debug flag) returns the same
engine, so its loaded dictionaries and cache are reused instead of being
loaded again.

The registry is an explicit object. Applications that want a single
process-wide registry can use ``default_registry``; tests create their own
or call ``clear()`` between cases.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from i18nengine.localization.engine import TranslationEngine

if TYPE_CHECKING:
    from i18nengine.localization.config import I18nConfig

__all__ = ["EngineRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Maps configuration fingerprints to shared TranslationEngines.

    Example:
        >>> registry = EngineRegistry()
        >>> first = registry.create(config)
        >>> registry.create(config) is first
        True
        >>> registry.clear()
        >>> registry.create(config) is first
        False
    """

    __slots__ = ("_factory", "_instances")

    def __init__(
        self,
        factory: Callable[[I18nConfig], TranslationEngine] = TranslationEngine,
    ) -> None:
        """Initialize an empty registry.

        Args:
            factory: Builds an engine for a configuration
        """
        self._factory = factory
        self._instances: dict[str, TranslationEngine] = {}

    def create(
        self,
        config: I18nConfig,
        *,
        replaces: I18nConfig | None = None,
    ) -> TranslationEngine:
        """Get the engine for config, constructing it on first request.

        Args:
            config: Engine configuration
            replaces: Configuration this one supersedes. When its
                fingerprint differs, the superseded engine's cache is
                cleared and the engine is released.

        Returns:
            Shared engine for config's fingerprint
        """
        fingerprint = config.fingerprint
        if replaces is not None and replaces.fingerprint != fingerprint:
            self.discard(replaces)

        engine = self._instances.get(fingerprint)
        if engine is None:
            engine = self._factory(config)
            self._instances[fingerprint] = engine
            logger.debug("Created translation engine for %s", fingerprint)
        return engine

    def get(self, config: I18nConfig) -> TranslationEngine | None:
        """Get the engine for config's fingerprint without creating one."""
        return self._instances.get(config.fingerprint)

    def discard(self, config: I18nConfig) -> bool:
        """Release the engine for config's fingerprint.

        Returns:
            True if an engine was released
        """
        engine = self._instances.pop(config.fingerprint, None)
        if engine is None:
            return False
        engine.clear_cache()
        logger.debug("Released translation engine for %s", config.fingerprint)
        return True

    def clear(self) -> None:
        """Release every engine and clear their caches."""
        for engine in self._instances.values():
            engine.clear_cache()
        self._instances.clear()

    def fingerprints(self) -> tuple[str, ...]:
        """Fingerprints of the held engines, in creation order."""
        return tuple(self._instances)

    def __len__(self) -> int:
        """Number of held engines."""
        return len(self._instances)

    def __contains__(self, config: object) -> bool:
        """Check whether an engine exists for a configuration."""
        fingerprint = getattr(config, "fingerprint", None)
        return fingerprint in self._instances


default_registry = EngineRegistry()
