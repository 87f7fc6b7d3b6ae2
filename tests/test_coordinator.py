"""Tests for LoadCoordinator.

Covers cache consultation, in-flight deduplication, payload validation,
retry with exponential backoff, fallback-language recovery, the empty-tree
outcome, stale-data retention, and load result recording.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import pytest

from i18nengine.diagnostics import ErrorLoggingConfig, TranslationError
from i18nengine.enums import ErrorCode, LoadStatus
from i18nengine.localization.coordinator import LoadCoordinator
from i18nengine.runtime.cache import TranslationCache
from i18nengine.runtime.cache_config import CacheConfig
from i18nengine.runtime.recovery import RecoveryStrategy
from tests.helpers.loaders import RecordingLoader, SleepRecorder, no_sleep

DATA = {
    "ko": {"common": {"welcome": "환영합니다"}},
    "en": {"common": {"welcome": "Welcome"}},
}

QUIET = ErrorLoggingConfig(enabled=False)


def make_coordinator(
    loader: RecordingLoader,
    *,
    fallback_language: str | None = "en",
    recovery: RecoveryStrategy | None = None,
    cache: TranslationCache | None = None,
    sleep: Callable[[float], Awaitable[object]] = no_sleep,
    errors: list[tuple[TranslationError, str, str]] | None = None,
) -> tuple[LoadCoordinator, dict, TranslationCache]:
    table: dict = {}
    cache = cache if cache is not None else TranslationCache()

    def handler(error: TranslationError, language: str, namespace: str) -> None:
        if errors is not None:
            errors.append((error, language, namespace))

    coordinator = LoadCoordinator(
        loader,
        cache,
        table,
        fallback_language=fallback_language,
        recovery=recovery,
        error_handler=handler,
        logging_config=QUIET,
        sleep=sleep,
    )
    return coordinator, table, cache


class TestSuccessfulLoads:
    """Plain loads and cache reuse."""

    @pytest.mark.asyncio
    async def test_load_fills_table_and_cache(self) -> None:
        """A successful load is written to both stores."""
        loader = RecordingLoader(DATA)
        coordinator, table, cache = make_coordinator(loader)

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {"welcome": "환영합니다"}
        assert table["ko"]["common"] == {"welcome": "환영합니다"}
        assert ("ko", "common") in cache
        summary = coordinator.get_load_summary()
        assert summary.successful == 1
        assert summary.all_successful

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self) -> None:
        """A live cache entry skips the loader."""
        loader = RecordingLoader(DATA)
        coordinator, _, cache = make_coordinator(loader)

        await coordinator.ensure_loaded("ko", "common")
        await coordinator.ensure_loaded("ko", "common")

        assert loader.counts[("ko", "common")] == 1
        assert cache.get_stats()["hits"] == 1

    @pytest.mark.asyncio
    async def test_expired_entry_reloads(self) -> None:
        """With ttl=0 every ensure_loaded goes back to the loader."""
        loader = RecordingLoader(DATA)
        coordinator, _, _ = make_coordinator(
            loader, cache=TranslationCache(CacheConfig(ttl=0))
        )

        await coordinator.ensure_loaded("ko", "common")
        await coordinator.ensure_loaded("ko", "common")

        assert loader.counts[("ko", "common")] == 2

    @pytest.mark.asyncio
    async def test_sync_loader_accepted(self) -> None:
        """A loader returning a plain mapping is accepted."""
        table: dict = {}
        coordinator = LoadCoordinator(
            lambda language, namespace: {"hello": f"{language}:{namespace}"},
            TranslationCache(),
            table,
        )
        assert await coordinator.ensure_loaded("ko", "common") == {"hello": "ko:common"}


class TestDeduplication:
    """At most one outstanding load per pair."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_load(self) -> None:
        """N concurrent ensure_loaded calls invoke the loader once."""
        loader = RecordingLoader(DATA, delay=0.01)
        coordinator, _, _ = make_coordinator(loader)

        results = await asyncio.gather(
            *(coordinator.ensure_loaded("ko", "common") for _ in range(10))
        )

        assert loader.counts[("ko", "common")] == 1
        assert all(result == {"welcome": "환영합니다"} for result in results)
        assert not coordinator.is_loading("ko", "common")

    @pytest.mark.asyncio
    async def test_is_loading_while_in_flight(self) -> None:
        """is_loading reports the pending pair."""
        loader = RecordingLoader(DATA, delay=0.01)
        coordinator, _, _ = make_coordinator(loader)

        task = asyncio.ensure_future(coordinator.ensure_loaded("ko", "common"))
        await asyncio.sleep(0)
        assert coordinator.is_loading("ko", "common")
        await task
        assert not coordinator.is_loading("ko", "common")

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_load(self) -> None:
        """Cancelling one waiter leaves the load running for the others."""
        loader = RecordingLoader(DATA, delay=0.02)
        coordinator, _, _ = make_coordinator(loader)

        first = asyncio.ensure_future(coordinator.ensure_loaded("ko", "common"))
        second = asyncio.ensure_future(coordinator.ensure_loaded("ko", "common"))
        await asyncio.sleep(0)
        first.cancel()

        assert await second == {"welcome": "환영합니다"}
        assert loader.counts[("ko", "common")] == 1


class TestRetry:
    """Retry with exponential backoff."""

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self) -> None:
        """Two failures then success -> SUCCESS after three attempts."""
        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", ConnectionError("reset"), OSError("disk"))
        sleeps = SleepRecorder()
        coordinator, _, _ = make_coordinator(loader, sleep=sleeps)

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {"welcome": "환영합니다"}
        assert sleeps.delays == [1.0, 2.0]
        (result,) = coordinator.get_load_summary().results
        assert result.status is LoadStatus.SUCCESS
        assert result.attempts == 3

    @pytest.mark.asyncio
    async def test_backoff_schedule_and_hooks(self) -> None:
        """Delays grow by the multiplier; hooks see each retry and the exhaustion."""
        loader = RecordingLoader(DATA)
        loader.always_fail("ko", "common", ConnectionError("down"))
        retries: list[tuple[ErrorCode, int]] = []
        exhausted: list[TranslationError] = []
        strategy = RecoveryStrategy(
            max_retries=3,
            retry_delay=1.0,
            backoff_multiplier=2.0,
            on_retry=lambda error, attempt: retries.append((error.code, attempt)),
            on_max_retries_exceeded=exhausted.append,
        )
        sleeps = SleepRecorder()
        coordinator, _, _ = make_coordinator(loader, recovery=strategy, sleep=sleeps)

        await coordinator.ensure_loaded("ko", "common")

        assert sleeps.delays == [1.0, 2.0, 4.0]
        assert retries == [(ErrorCode.NETWORK_ERROR, n) for n in (1, 2, 3)]
        assert len(exhausted) == 1
        assert exhausted[0].retry_count == 3
        assert loader.counts[("ko", "common")] == 4

    @pytest.mark.asyncio
    async def test_non_recoverable_error_is_not_retried(self) -> None:
        """A malformed payload goes straight to the fallback language."""
        loader = RecordingLoader({"ko": {"common": ["not", "a", "tree"]}, "en": DATA["en"]})
        sleeps = SleepRecorder()
        errors: list[tuple[TranslationError, str, str]] = []
        coordinator, _, _ = make_coordinator(loader, sleep=sleeps, errors=errors)

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {"welcome": "Welcome"}
        assert sleeps.delays == []
        assert loader.counts[("ko", "common")] == 1
        assert errors[0][0].code is ErrorCode.VALIDATION_ERROR

    @pytest.mark.asyncio
    async def test_custom_should_retry(self) -> None:
        """A custom predicate can refuse retries."""
        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", ConnectionError("down"))
        strategy = RecoveryStrategy(should_retry=lambda error: False)
        coordinator, _, _ = make_coordinator(loader, recovery=strategy)

        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "Welcome"}
        assert loader.counts[("ko", "common")] == 1

    @pytest.mark.asyncio
    async def test_error_handler_called_per_failure(self) -> None:
        """Every failed attempt reaches the error handler with its retry count."""
        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", TimeoutError(), TimeoutError())
        errors: list[tuple[TranslationError, str, str]] = []
        coordinator, _, _ = make_coordinator(loader, errors=errors)

        await coordinator.ensure_loaded("ko", "common")

        assert [(e.retry_count, lang, ns) for e, lang, ns in errors] == [
            (0, "ko", "common"),
            (1, "ko", "common"),
        ]
        assert all(e.code is ErrorCode.NETWORK_ERROR for e, _, _ in errors)


class TestRecovery:
    """Fallback-language load, then empty tree."""

    @pytest.mark.asyncio
    async def test_fallback_language_used_after_exhaustion(self) -> None:
        """Primary failure -> fallback language tree stored under the primary pair."""
        loader = RecordingLoader(DATA)
        loader.always_fail("ko", "common", OSError("gone"))
        coordinator, table, cache = make_coordinator(
            loader, recovery=RecoveryStrategy(max_retries=1)
        )

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {"welcome": "Welcome"}
        assert table["ko"]["common"] == {"welcome": "Welcome"}
        assert ("ko", "common") in cache
        (result,) = coordinator.get_load_summary().results
        assert result.status is LoadStatus.FALLBACK
        assert result.attempts == 2
        assert result.error is not None
        assert result.error.code is ErrorCode.LOAD_FAILED

    @pytest.mark.asyncio
    async def test_empty_tree_when_fallback_fails(self) -> None:
        """Both loads fail -> empty tree, not cached, retried on next call."""
        loader = RecordingLoader(DATA)
        loader.always_fail("ko", "common", OSError("gone"))
        loader.always_fail("en", "common", OSError("gone too"))
        coordinator, table, cache = make_coordinator(
            loader, recovery=RecoveryStrategy(max_retries=0)
        )

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {}
        assert table["ko"]["common"] == {}
        assert ("ko", "common") not in cache
        summary = coordinator.get_load_summary()
        assert summary.empty == 1
        assert summary.has_failures
        (result,) = summary.get_failed()
        assert result.fallback_error is not None
        assert result.fallback_error.language == "en"

        await coordinator.ensure_loaded("ko", "common")
        assert loader.counts[("ko", "common")] == 2

    @pytest.mark.asyncio
    async def test_no_fallback_language(self) -> None:
        """Without a fallback language a failed load is empty right away."""
        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", OSError("gone"))
        coordinator, _, _ = make_coordinator(
            loader, fallback_language=None, recovery=RecoveryStrategy(max_retries=0)
        )

        assert await coordinator.ensure_loaded("ko", "common") == {}
        assert loader.calls == [("ko", "common")]

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_stale_data(self) -> None:
        """An expired entry whose reload fails keeps serving the old tree."""
        loader = RecordingLoader(DATA)
        coordinator, table, _ = make_coordinator(
            loader,
            cache=TranslationCache(CacheConfig(ttl=0)),
            recovery=RecoveryStrategy(max_retries=0),
        )
        await coordinator.ensure_loaded("ko", "common")
        loader.fail("ko", "common", OSError("gone"))

        tree = await coordinator.ensure_loaded("ko", "common")

        assert tree == {"welcome": "환영합니다"}
        assert table["ko"]["common"] == {"welcome": "환영합니다"}
        assert coordinator.get_load_summary().stale == 1
        assert ("en", "common") not in loader.counts

    @pytest.mark.asyncio
    async def test_failing_error_handler_does_not_abort_recovery(self) -> None:
        """A raising error handler is isolated."""

        def handler(error: TranslationError, language: str, namespace: str) -> None:
            msg = "handler broke"
            raise RuntimeError(msg)

        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", OSError("gone"))
        coordinator = LoadCoordinator(
            loader,
            TranslationCache(),
            {},
            fallback_language="en",
            recovery=RecoveryStrategy(max_retries=0),
            error_handler=handler,
            logging_config=QUIET,
        )
        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "Welcome"}

    @pytest.mark.asyncio
    async def test_failing_retry_hook_does_not_abort_retry(self) -> None:
        """A raising on_retry is logged and the retry still happens."""

        def on_retry(error: TranslationError, attempt: int) -> None:
            msg = "hook failed"
            raise RuntimeError(msg)

        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", ConnectionError("reset"))
        coordinator, _, _ = make_coordinator(loader, recovery=RecoveryStrategy(on_retry=on_retry))

        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "환영합니다"}
        assert loader.counts[("ko", "common")] == 2
        (result,) = coordinator.get_load_summary().results
        assert result.status is LoadStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_failing_exhaustion_hook_still_falls_back(self) -> None:
        """A raising on_max_retries_exceeded does not skip the fallback load."""

        def exhausted(error: TranslationError) -> None:
            msg = "hook failed"
            raise RuntimeError(msg)

        loader = RecordingLoader(DATA)
        loader.always_fail("ko", "common", OSError("gone"))
        strategy = RecoveryStrategy(max_retries=1, on_max_retries_exceeded=exhausted)
        coordinator, _, _ = make_coordinator(loader, recovery=strategy)

        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "Welcome"}

    @pytest.mark.asyncio
    async def test_failing_retry_predicate_stops_retrying(self) -> None:
        """A raising should_retry counts as no retry."""

        def should_retry(error: TranslationError) -> bool:
            msg = "predicate failed"
            raise RuntimeError(msg)

        loader = RecordingLoader(DATA)
        loader.fail("ko", "common", ConnectionError("reset"))
        coordinator, _, _ = make_coordinator(
            loader, recovery=RecoveryStrategy(should_retry=should_retry)
        )

        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "Welcome"}
        assert loader.counts[("ko", "common")] == 1

    @pytest.mark.asyncio
    async def test_failing_custom_logger_does_not_escape(self) -> None:
        """A raising custom_logger leaves recovery intact."""

        def custom_logger(error: TranslationError) -> None:
            msg = "sink failed"
            raise RuntimeError(msg)

        loader = RecordingLoader(DATA)
        loader.always_fail("ko", "common", OSError("gone"))
        coordinator = LoadCoordinator(
            loader,
            TranslationCache(),
            {},
            fallback_language="en",
            recovery=RecoveryStrategy(max_retries=0),
            logging_config=ErrorLoggingConfig(custom_logger=custom_logger),
        )

        assert await coordinator.ensure_loaded("ko", "common") == {"welcome": "Welcome"}

    @pytest.mark.asyncio
    async def test_reset_forgets_results(self) -> None:
        """reset() clears the recorded summary."""
        coordinator, _, _ = make_coordinator(RecordingLoader(DATA))
        await coordinator.ensure_loaded("ko", "common")
        coordinator.reset()
        assert coordinator.get_load_summary().total_attempted == 0
