"""Quickstart example for i18nengine.

Demonstrates dotted-key lookup with a Korean default language and an
English fallback, loaded from JSON files on disk.

Scenarios covered:
1. Basic lookup and interpolation
2. Language switching
3. Fallback chain and missing keys
4. Retry and recovery around a flaky loader
5. Server-side rendering with resolve_snapshot

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json
import logging
import tempfile
from pathlib import Path

from i18nengine import (
    I18nConfig,
    JsonFileLoader,
    RecoveryStrategy,
    TranslationEngine,
    create_dev_config,
    create_simple_config,
    resolve_snapshot,
)
from i18nengine.localization import ErrorHandlingConfig

TRANSLATIONS = {
    "ko": {
        "common": {"welcome": "환영합니다", "greeting": "안녕하세요, {{name}}님!"},
        "auth": {"login": {"title": "로그인"}},
    },
    "en": {
        "common": {"welcome": "Welcome", "greeting": "Hello, {{name}}!"},
        "auth": {"login": {"title": "Sign in", "forgot": "Forgot your password?"}},
    },
}


def write_translations(root: Path) -> None:
    for language, namespaces in TRANSLATIONS.items():
        (root / language).mkdir(parents=True, exist_ok=True)
        for namespace, tree in namespaces.items():
            path = root / language / f"{namespace}.json"
            path.write_text(json.dumps(tree, ensure_ascii=False), encoding="utf-8")


async def example_1_basic_lookup(root: Path) -> None:
    print("=" * 50)
    print("Example 1: Basic Lookup")
    print("=" * 50)

    config = create_simple_config(
        "ko",
        JsonFileLoader(f"{root}/{{language}}"),
        fallback_language="en",
        namespaces=("common", "auth"),
    )
    engine = TranslationEngine(config)
    await engine.initialize()

    print(engine.resolve("common.welcome"))
    # Output: 환영합니다
    print(engine.resolve("welcome"))
    # Output: 환영합니다  (keys without '.' live in common)
    print(engine.resolve_with_params("common.greeting", {"name": "Cheolsu"}))
    # Output: 안녕하세요, Cheolsu님!


async def example_2_switch_language(root: Path) -> None:
    print("\n" + "=" * 50)
    print("Example 2: Language Switching")
    print("=" * 50)

    engine = TranslationEngine(
        create_simple_config("ko", JsonFileLoader(f"{root}/{{language}}"), fallback_language="en")
    )
    await engine.initialize()
    engine.subscribe(lambda language: print(f"  (language is now {language})"))

    engine.set_language("en")
    await engine.ensure_language("en")
    print(engine.resolve("common.welcome"))
    # Output: Welcome


async def example_3_fallback_chain(root: Path) -> None:
    print("\n" + "=" * 50)
    print("Example 3: Fallback Chain")
    print("=" * 50)

    config = create_dev_config(
        create_simple_config(
            "ko",
            JsonFileLoader(f"{root}/{{language}}"),
            fallback_language="en",
            namespaces=("common", "auth"),
        )
    )
    engine = TranslationEngine(config)
    await engine.initialize()

    print(engine.resolve("auth.login.forgot"))
    # Output: Forgot your password?  (answered by English)
    print(engine.resolve("auth.welcome"))
    # Output: 환영합니다  (answered by the common namespace)
    print(engine.resolve("auth.unknown"))
    # Output: [MISSING: auth.unknown]


async def example_4_flaky_loader() -> None:
    print("\n" + "=" * 50)
    print("Example 4: Retry and Recovery")
    print("=" * 50)

    attempts = {"count": 0}

    async def flaky(language: str, namespace: str) -> dict[str, object]:
        attempts["count"] += 1
        if language == "ko" and attempts["count"] < 3:
            msg = "connection reset"
            raise ConnectionError(msg)
        return TRANSLATIONS[language].get(namespace, {})

    config = I18nConfig(
        default_language="ko",
        fallback_language="en",
        load_translations=flaky,
        error_handling=ErrorHandlingConfig(
            recovery_strategy=RecoveryStrategy(retry_delay=0.05),
        ),
    )
    engine = TranslationEngine(config)
    await engine.initialize()

    print(engine.resolve("common.welcome"))
    # Output: 환영합니다  (after two retries)
    print(engine.get_load_summary())


def example_5_snapshot() -> None:
    print("\n" + "=" * 50)
    print("Example 5: Server-Side Snapshot")
    print("=" * 50)

    print(resolve_snapshot(TRANSLATIONS, "auth.login.title", "ko", "en"))
    # Output: 로그인
    print(resolve_snapshot(TRANSLATIONS, "common.missing", "ko", "en"))
    # Output: common.missing


async def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        write_translations(root)
        await example_1_basic_lookup(root)
        await example_2_switch_language(root)
        await example_3_fallback_chain(root)
    await example_4_flaky_loader()
    example_5_snapshot()


if __name__ == "__main__":
    asyncio.run(main())
