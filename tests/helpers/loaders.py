"""Loader doubles for engine and coordinator tests.

RecordingLoader serves trees from an in-memory dictionary table, counts
every call, and can be told to fail a given number of times per pair.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Mapping
from typing import Any


class RecordingLoader:
    """In-memory async loader that records calls.

    Attributes:
        data: language -> namespace -> payload returned by the loader
        calls: Ordered list of (language, namespace) calls
        failures: (language, namespace) -> exceptions still to raise, in order
        delay: Seconds each call sleeps before answering
    """

    def __init__(
        self,
        data: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        delay: float = 0.0,
    ) -> None:
        self.data: dict[str, dict[str, Any]] = {
            language: dict(namespaces) for language, namespaces in (data or {}).items()
        }
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], list[BaseException]] = {}
        self.delay = delay

    def fail(self, language: str, namespace: str, *errors: BaseException) -> None:
        """Queue exceptions to raise on the next calls for a pair."""
        self.failures.setdefault((language, namespace), []).extend(errors)

    def always_fail(self, language: str, namespace: str, error: BaseException, times: int = 50) -> None:
        """Queue the same exception many times."""
        self.fail(language, namespace, *([error] * times))

    @property
    def counts(self) -> Counter[tuple[str, str]]:
        """Number of calls per (language, namespace)."""
        return Counter(self.calls)

    async def __call__(self, language: str, namespace: str) -> Any:
        self.calls.append((language, namespace))
        if self.delay:
            await asyncio.sleep(self.delay)
        pending = self.failures.get((language, namespace))
        if pending:
            raise pending.pop(0)
        return self.data.get(language, {}).get(namespace, {})


async def no_sleep(_delay: float) -> None:
    """Retry delay that returns immediately."""


class SleepRecorder:
    """Retry delay that records requested durations without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
