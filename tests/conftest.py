"""Shared pytest setup: Hypothesis profiles and opt-in fuzz runs.

Profiles are chosen by HYPOTHESIS_PROFILE, else CI=true selects "ci",
else "dev". Tests marked ``fuzz`` run only under ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Verbosity, settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.register_profile("verbose", max_examples=50, verbosity=Verbosity.verbose)

_PROFILE = os.environ.get("HYPOTHESIS_PROFILE") or (
    "ci" if os.environ.get("CI") == "true" else "dev"
)
settings.load_profile(_PROFILE)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests unless the marker expression selects them."""
    if "fuzz" in (config.getoption("-m") or ""):
        return
    skip = pytest.mark.skip(reason="fuzz test; select with -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
