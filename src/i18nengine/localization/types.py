"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating loaders and handlers.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "DictionaryTable",
    "LanguageCode",
    "NamespaceName",
    "NamespaceTree",
    "TranslationKey",
    "TranslationParams",
]

type LanguageCode = str
"""Language code (e.g., 'ko', 'en', 'pt-BR')."""

type NamespaceName = str
"""Partition of a language's dictionary (e.g., 'common', 'auth')."""

type TranslationKey = str
"""Dotted lookup key (e.g., 'auth.login.title')."""

type NamespaceTree = Mapping[str, str | NamespaceTree]
"""Nested mapping whose leaves are strings."""

type DictionaryTable = Mapping[LanguageCode, Mapping[NamespaceName, NamespaceTree]]
"""language -> namespace -> tree."""

type TranslationParams = Mapping[str, object]
"""Values substituted into {{placeholder}} slots."""
