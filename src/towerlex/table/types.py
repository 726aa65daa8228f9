"""Translation table types.

Provides semantic type aliases and the immutable TranslationTable produced
by the compiler and read by the resolver.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

__all__ = [
    "AuthoringMap",
    "LocaleCode",
    "TranslationKey",
    "TranslationTable",
]

LocaleCode: TypeAlias = str
"""Locale code with subtags joined by '_' (e.g., 'en', 'en_US', 'en_US_var1')."""

TranslationKey: TypeAlias = str
"""Fully-qualified key with segments joined by '/' (e.g., 'root/buttons/login')."""

AuthoringMap: TypeAlias = Mapping[str, object]
"""Nested authoring mapping: locale -> namespace... -> leaf name -> text."""


def _freeze(
    translations: Mapping[LocaleCode, Mapping[TranslationKey, str]],
) -> Mapping[LocaleCode, Mapping[TranslationKey, str]]:
    return MappingProxyType(
        {locale: MappingProxyType(dict(entries)) for locale, entries in translations.items()}
    )


@dataclass(frozen=True, slots=True, eq=False)
class TranslationTable:
    """Compiled, read-only translation lookup table.

    Maps locale code to (fully-qualified key -> final text) and records the
    canonical locale used as last-resort fallback in production mode. The
    canonical locale is a dedicated attribute rather than an entry in the
    locale mapping, so it can never collide with a real locale's keys.

    Tables are built once by compile_translation_table() and never mutated:
    both mapping levels are read-only proxies over private copies. Replace a
    table wholesale to reload; concurrent readers need no locking.

    Example:
        >>> table = TranslationTable("en", {"en": {"a/b": "A B"}})
        >>> table.get("en", "a/b")
        'A B'
        >>> table.get("en_US", "a/b") is None
        True

    Attributes:
        canonical_locale: Locale used as last-resort source of text
        translations: Read-only locale -> key -> text mapping
    """

    canonical_locale: LocaleCode
    translations: Mapping[LocaleCode, Mapping[TranslationKey, str]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        """Take a private, read-only copy of the translations."""
        object.__setattr__(self, "translations", _freeze(self.translations))

    def get(self, locale: LocaleCode, key: TranslationKey) -> str | None:
        """Return text for key under exactly this locale, or None."""
        entries = self.translations.get(locale)
        if entries is None:
            return None
        return entries.get(key)

    def get_canonical(self, key: TranslationKey) -> str | None:
        """Return text for key under the canonical locale, or None."""
        return self.get(self.canonical_locale, key)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with at least one entry, in compilation order."""
        return tuple(self.translations)

    def keys(self, locale: LocaleCode) -> frozenset[TranslationKey]:
        """Return all keys defined for a locale (empty for unknown locales)."""
        return frozenset(self.translations.get(locale, ()))

    def to_dict(self) -> dict[LocaleCode, dict[TranslationKey, str]]:
        """Return a mutable deep copy of the translations."""
        return {locale: dict(entries) for locale, entries in self.translations.items()}

    def __contains__(self, locale: object) -> bool:
        return locale in self.translations

    def __iter__(self) -> Iterator[LocaleCode]:
        return iter(self.translations)

    def __len__(self) -> int:
        """Number of locales with entries."""
        return len(self.translations)

    @property
    def entry_count(self) -> int:
        """Total number of entries across all locales."""
        return sum(len(entries) for entries in self.translations.values())

    def __repr__(self) -> str:
        return (
            f"TranslationTable(canonical_locale={self.canonical_locale!r}, "
            f"locales={list(self.translations)!r}, entries={self.entry_count})"
        )
