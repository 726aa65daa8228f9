"""Translation table compiler.

Turns a development-friendly nested authoring map into the flat lookup
table read by the resolver:

    {"en":    {"root": {"buttons": {"login.html": "<strong>Sign in</strong>",
                                    "login.note": "Title of login button (bold)",
                                    "logout.md":  "**Sign out**",
                                    "message":    "Hello & welcome."}}},
     "en_US": {"root": {"buttons": {"logout": "American sign out"}}}}
    =>
    TranslationTable(canonical_locale="en", translations={
        "en":    {"root/buttons/login":   "<strong>Sign in</strong>",
                  "root/buttons/logout":  "<strong>Sign out</strong>",
                  "root/buttons/message": "Hello &amp; welcome."},
        "en_US": {"root/buttons/logout":  "American sign out"}})

Merge Rule:
    Entries merge one level deep (locale, then key). When two leaves compile
    to the same key under the same locale (e.g. "login.html" and "login"),
    the one appearing later in authoring order wins. Dict insertion order
    makes this deterministic; every override is logged.

Thread Safety:
    Compilation is a pure function of its inputs. Build a new table and
    replace the old one to reload (see TranslationStore).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from towerlex.enums import Decorator
from towerlex.locale_utils import normalize_locale
from towerlex.markup import escape_html, inline_markdown_to_html
from towerlex.table.paths import LeafPath, leaf_paths
from towerlex.table.types import LocaleCode, TranslationKey, TranslationTable

__all__ = ["TableCompiler", "compile_leaf", "compile_translation_table"]

logger = logging.getLogger(__name__)


def compile_leaf(leaf: LeafPath) -> str | None:
    """Apply a leaf's decorator rule to its raw text.

    Args:
        leaf: Leaf extracted from an authoring map

    Returns:
        Final table text, or None for notes (which contribute no entry)
    """
    match leaf.decorator:
        case Decorator.HTML:
            # Author asserts the markup is safe
            return leaf.text
        case Decorator.MARKDOWN:
            return inline_markdown_to_html(escape_html(leaf.text))
        case Decorator.NOTE:
            return None
        case _:
            return escape_html(leaf.text)


class TableCompiler:
    """Compiles authoring maps into TranslationTable instances.

    Attributes:
        strict: Reject unknown decorator suffixes (``name.unknown``) with
            MalformedPathError instead of treating them as undecorated.

    Example:
        >>> compiler = TableCompiler()
        >>> table = compiler.compile("en", {"en": {"a": {"b": "A & B"}}})
        >>> table.get("en", "a/b")
        'A &amp; B'
    """

    __slots__ = ("_strict",)

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict

    @property
    def strict(self) -> bool:
        """Whether unknown decorators are rejected."""
        return self._strict

    def compile(
        self,
        canonical_locale: LocaleCode,
        authoring_map: Mapping[str, object],
    ) -> TranslationTable:
        """Compile an authoring map into a translation table.

        Args:
            canonical_locale: Locale used as last-resort fallback
            authoring_map: Nested mapping locale -> namespace... -> leaf -> text

        Returns:
            Immutable TranslationTable

        Raises:
            MalformedPathError: If any leaf path is malformed. Nothing is
                returned in that case; tables are never half-built.
        """
        merged: dict[LocaleCode, dict[TranslationKey, str]] = {}

        for leaf in leaf_paths(authoring_map, strict=self._strict):
            text = compile_leaf(leaf)
            if text is None:
                continue

            entries = merged.setdefault(leaf.locale, {})
            key = leaf.key
            if key in entries:
                logger.warning(
                    "Translation '%s' for locale '%s' defined more than once; "
                    "keeping the later definition",
                    key,
                    leaf.locale,
                )
            entries[key] = text

        table = TranslationTable(normalize_locale(canonical_locale), merged)
        logger.debug("Compiled %r", table)
        return table


def compile_translation_table(
    canonical_locale: LocaleCode,
    authoring_map: Mapping[str, object],
    *,
    strict: bool = False,
) -> TranslationTable:
    """Compile an authoring map into a translation table.

    Convenience wrapper around TableCompiler.compile().

    Args:
        canonical_locale: Locale used as last-resort fallback
        authoring_map: Nested mapping locale -> namespace... -> leaf -> text
        strict: Reject unknown decorator suffixes

    Returns:
        Immutable TranslationTable

    Raises:
        MalformedPathError: If any leaf path is malformed
    """
    return TableCompiler(strict=strict).compile(canonical_locale, authoring_map)
