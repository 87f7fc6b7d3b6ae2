"""Tests for the top-level package surface and lookup robustness.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, event, given, settings
from hypothesis import strategies as st

import i18nengine
from i18nengine import resolve_snapshot
from tests.strategies import namespace_trees


class TestExports:
    """Public names are importable from the package root."""

    def test_all_names_resolve(self) -> None:
        """Every name in __all__ exists."""
        for name in i18nengine.__all__:
            assert hasattr(i18nengine, name), name

    def test_version_is_string(self) -> None:
        """__version__ is populated installed or not."""
        assert isinstance(i18nengine.__version__, str)
        assert i18nengine.__version__


class TestLookupNeverRaises:
    """Resolution always produces a string."""

    @pytest.mark.fuzz
    @given(
        tree=namespace_trees(max_depth=4),
        key=st.text(max_size=30),
        language=st.sampled_from(["ko", "en", ""]),
    )
    @settings(max_examples=1000, suppress_health_check=[HealthCheck.too_slow])
    def test_arbitrary_keys(self, tree: dict[str, object], key: str, language: str) -> None:
        """Arbitrary keys over arbitrary trees return a string."""
        table = {"ko": {"common": tree}, "en": {"common": tree}}
        text = resolve_snapshot(table, key, language, "en")
        event(f"empty_key={not key}")
        assert isinstance(text, str)
        if not key:
            assert text == ""
