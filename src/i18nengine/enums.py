"""Enumerations for I18nEngine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they log and serialize as
plain values.

Python 3.13+.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Kind of a TranslationError.

    StrEnum provides automatic string conversion: str(ErrorCode.LOAD_FAILED) == "LOAD_FAILED"
    """

    MISSING_KEY = "MISSING_KEY"
    """Key absent from every dictionary in the fallback chain."""

    LOAD_FAILED = "LOAD_FAILED"
    """Loader raised or returned nothing usable."""

    INVALID_KEY = "INVALID_KEY"
    """Empty or non-string lookup key."""

    NETWORK_ERROR = "NETWORK_ERROR"
    """Loader failed on a connection or timeout."""

    INITIALIZATION_ERROR = "INITIALIZATION_ERROR"
    """Engine could not complete initialize()."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Configuration or loaded payload failed validation."""

    CACHE_ERROR = "CACHE_ERROR"
    """Cache store failure."""


class InitState(StrEnum):
    """Engine initialization state.

    uninitialized -> initializing -> ready, or initializing -> failed.
    """

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class LoadStatus(StrEnum):
    """Outcome of a single (language, namespace) load."""

    SUCCESS = "success"
    """Primary loader call returned a valid tree."""

    FALLBACK = "fallback"
    """Primary load failed; fallback language data was used."""

    EMPTY = "empty"
    """Primary and fallback loads failed; an empty tree was stored."""

    STALE = "stale"
    """Refresh failed; previously loaded data was kept."""


class ResolutionSource(StrEnum):
    """Where a resolved string came from in the lookup chain."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    COMMON = "common"
    MISSING = "missing"


class Severity(StrEnum):
    """Severity of a user-facing error description."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Tone(StrEnum):
    """Tone metadata for a language descriptor."""

    EMOTIONAL = "emotional"
    ENCOURAGING = "encouraging"
    CALM = "calm"
    GENTLE = "gentle"
    FORMAL = "formal"
    TECHNICAL = "technical"
    INFORMAL = "informal"


class Formality(StrEnum):
    """Formality metadata for a language descriptor."""

    INFORMAL = "informal"
    CASUAL = "casual"
    FORMAL = "formal"
    POLITE = "polite"


__all__ = [
    "ErrorCode",
    "Formality",
    "InitState",
    "LoadStatus",
    "ResolutionSource",
    "Severity",
    "Tone",
]
