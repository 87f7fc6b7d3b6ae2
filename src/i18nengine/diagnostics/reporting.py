"""Structured logging of translation errors.

Routes TranslationErrors to the stdlib logging system (or a custom sink)
according to an ErrorLoggingConfig.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from .errors import TranslationError

__all__ = ["ErrorLoggingConfig", "LogLevel", "log_translation_error"]

logger = logging.getLogger(__name__)

type LogLevel = Literal["error", "warn", "info", "debug"]

_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@dataclass(frozen=True, slots=True)
class ErrorLoggingConfig:
    """How load and resolution errors are logged.

    Attributes:
        enabled: Emit anything at all
        level: Log level for error records
        include_stack: Attach the cause's traceback
        include_context: Include language/namespace/key in the record
        custom_logger: Receives the error instead of the logging module
    """

    enabled: bool = True
    level: LogLevel = "error"
    include_stack: bool = True
    include_context: bool = True
    custom_logger: Callable[[TranslationError], None] | None = None

    def __post_init__(self) -> None:
        """Validate the log level.

        Raises:
            ValueError: If level is not one of error, warn, info, debug
        """
        if self.level not in _LEVELS:
            msg = f"level must be one of {sorted(_LEVELS)}, got: {self.level!r}"
            raise ValueError(msg)


DEFAULT_LOGGING_CONFIG = ErrorLoggingConfig()


def log_translation_error(
    error: TranslationError,
    config: ErrorLoggingConfig = DEFAULT_LOGGING_CONFIG,
) -> None:
    """Log a TranslationError according to config.

    Args:
        error: Error to report
        config: Logging configuration
    """
    if not config.enabled:
        return

    if config.custom_logger is not None:
        try:
            config.custom_logger(error)
        except Exception:  # noqa: BLE001 - reporting must not raise into the load path
            logger.exception("Custom error logger failed for [%s]", error.code)
        return

    record = error.to_dict(include_context=config.include_context)
    exc_info = None
    if config.include_stack and error.cause is not None:
        exc_info = (type(error.cause), error.cause, error.cause.__traceback__)

    logger.log(
        _LEVELS[config.level],
        "Translation error [%s]: %s",
        error.code,
        record,
        exc_info=exc_info,
    )
