"""Hypothesis strategies for namespace trees and dotted keys.

Provides reusable strategies for generating translation test data:
- Key segments and dotted paths
- Namespace trees with string leaves at bounded depth
- Templates containing {{placeholder}} slots

Event-Emitting Strategies (HypoFuzz-Optimized):
- namespace_trees: Emits tree_depth=N
- dotted_keys: Emits key_segments=N

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

_SEGMENT_CHARS = string.ascii_letters + string.digits + "_-"

key_segments: SearchStrategy[str] = st.text(alphabet=_SEGMENT_CHARS, min_size=1, max_size=12)
"""A single key segment (no dots)."""

placeholder_names: SearchStrategy[str] = st.text(
    alphabet=string.ascii_letters + string.digits + "_", min_size=1, max_size=10
)
"""Identifiers valid inside {{...}}."""

leaf_values: SearchStrategy[str] = st.text(max_size=40).filter(lambda s: "{{" not in s)
"""Translation strings without placeholders."""


@st.composite
def dotted_keys(draw: DrawFn, min_segments: int = 1, max_segments: int = 4) -> str:
    """Generate a dotted key such as ``auth.login.title``.

    Events emitted:
    - key_segments=N
    """
    segments = draw(st.lists(key_segments, min_size=min_segments, max_size=max_segments))
    event(f"key_segments={len(segments)}")
    return ".".join(segments)


def _trees(max_depth: int) -> SearchStrategy[dict[str, object]]:
    if max_depth <= 1:
        return st.dictionaries(key_segments, leaf_values, max_size=5)
    return st.dictionaries(
        key_segments,
        st.one_of(leaf_values, _trees(max_depth - 1)),
        max_size=5,
    )


@st.composite
def namespace_trees(draw: DrawFn, max_depth: int = 3) -> dict[str, object]:
    """Generate a namespace tree with string leaves.

    Events emitted:
    - tree_depth=N
    """
    tree = draw(_trees(max_depth))
    event(f"tree_depth={_depth(tree)}")
    return tree


def _depth(tree: object) -> int:
    if not isinstance(tree, dict) or not tree:
        return 0
    return 1 + max(_depth(child) for child in tree.values())


def leaf_paths(tree: dict[str, object], prefix: str = "") -> list[tuple[str, str]]:
    """All (dotted path, leaf) pairs in a tree."""
    pairs: list[tuple[str, str]] = []
    for key, child in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(child, str):
            pairs.append((path, child))
        else:
            pairs.extend(leaf_paths(child, path))  # type: ignore[arg-type]
    return pairs
