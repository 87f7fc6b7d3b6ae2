"""Hypothesis strategies for I18nEngine property-based testing.

Strategies are organized by domain:

- trees: Namespace trees, dotted keys, placeholder names

Usage:
    from tests.strategies import dotted_keys, namespace_trees
"""

from .trees import (
    dotted_keys,
    key_segments,
    leaf_paths,
    leaf_values,
    namespace_trees,
    placeholder_names,
)

__all__ = [
    "dotted_keys",
    "key_segments",
    "leaf_paths",
    "leaf_values",
    "namespace_trees",
    "placeholder_names",
]
