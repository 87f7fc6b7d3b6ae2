"""Namespace tree helpers.

Pure functions over namespace trees: validation, path traversal, key
splitting and placeholder interpolation. Shared by the resolver and the
load coordinator.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, TypeIs

from i18nengine.constants import COMMON_NAMESPACE, KEY_SEPARATOR, PLACEHOLDER_PATTERN

if TYPE_CHECKING:
    import re

    from i18nengine.localization.types import NamespaceTree, TranslationParams

__all__ = [
    "copy_tree",
    "get_nested_value",
    "interpolate",
    "is_namespace_tree",
    "split_key",
]


def is_namespace_tree(value: object) -> TypeIs[NamespaceTree]:
    """Check that value is a well-formed namespace tree.

    A tree is a mapping with string keys whose values are strings or
    nested trees. Lists, numbers and None are rejected at any depth.
    """
    if not isinstance(value, Mapping):
        return False
    for key, child in value.items():
        if not isinstance(key, str):
            return False
        if isinstance(child, str):
            continue
        if not is_namespace_tree(child):
            return False
    return True


def copy_tree(tree: NamespaceTree) -> dict[str, object]:
    """Deep-copy a tree into plain dicts."""
    return {
        key: child if isinstance(child, str) else copy_tree(child)
        for key, child in tree.items()
    }


def split_key(key: str) -> tuple[str, str]:
    """Split a dotted key into (namespace, in-namespace path).

    The first segment is the namespace. A key without a separator lives in
    the common namespace.

    Example:
        >>> split_key("auth.login.title")
        ('auth', 'login.title')
        >>> split_key("welcome")
        ('common', 'welcome')
    """
    namespace, sep, path = key.partition(KEY_SEPARATOR)
    if not sep:
        return COMMON_NAMESPACE, key
    return namespace, path


def get_nested_value(tree: object, path: str) -> object | None:
    """Descend a tree along a dotted path.

    Any intermediate value that is not a mapping ends the traversal with
    None; a missing tree is treated the same way.

    Args:
        tree: Namespace tree (or None)
        path: Dotted in-namespace path

    Returns:
        The value at the path (string or subtree), or None
    """
    current: object = tree
    for segment in path.split(KEY_SEPARATOR):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current


def interpolate(text: str, params: TranslationParams | None) -> str:
    """Replace {{identifier}} placeholders with parameter values.

    Placeholders whose parameter is absent or None are left verbatim.

    Example:
        >>> interpolate("Hello, {{name}}!", {"name": "Anna"})
        'Hello, Anna!'
        >>> interpolate("Hello, {{name}}!", {})
        'Hello, {{name}}!'
    """
    if not params:
        return text

    def _substitute(match: re.Match[str]) -> str:
        value = params.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, text)

