"""Reloadable holder for the current translation table.

Publish-by-replacement:
    A new table is compiled completely in isolation, then the store's
    reference is swapped to it in a single assignment. Readers never take a
    lock: they see either the old table or the new one, always fully formed.
    Writers (publish, reload) are serialized by a lock so two reloads cannot
    interleave.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping

from towerlex.locale_utils import normalize_locale
from towerlex.table.compiler import TableCompiler
from towerlex.table.loading import AuthoringLoader, load_authoring_map
from towerlex.table.types import LocaleCode, TranslationTable

__all__ = ["TranslationStore"]

logger = logging.getLogger(__name__)


class TranslationStore:
    """Owns the current TranslationTable and replaces it on reload.

    Example - Direct authoring map:
        >>> store = TranslationStore("en")
        >>> store.publish({"en": {"root": {"hello": "Hello"}}})
        >>> store.table.get("en", "root/hello")
        'Hello'

    Example - Disk-based sources:
        >>> loader = PathAuthoringLoader("locales/{locale}.toml")
        >>> store = TranslationStore("en", loader, locales=["en", "en_US", "de"])
        >>> store.reload()

    Attributes:
        canonical_locale: Locale recorded in every published table
    """

    __slots__ = ("_canonical_locale", "_compiler", "_loader", "_locales", "_table", "_write_lock")

    def __init__(
        self,
        canonical_locale: LocaleCode,
        loader: AuthoringLoader | None = None,
        *,
        locales: Iterable[LocaleCode] = (),
        strict: bool = False,
    ) -> None:
        """Initialize an empty store.

        Args:
            canonical_locale: Locale used as last-resort fallback
            loader: Source of per-locale authoring subtrees for reload()
            locales: Locales reload() asks the loader for; the canonical
                locale is always included first
            strict: Reject unknown decorator suffixes when compiling
        """
        self._canonical_locale = normalize_locale(canonical_locale)
        self._loader = loader
        self._locales: tuple[LocaleCode, ...] = tuple(
            dict.fromkeys([self._canonical_locale, *(normalize_locale(lc) for lc in locales)])
        )
        self._compiler = TableCompiler(strict=strict)
        self._table: TranslationTable | None = None
        self._write_lock = threading.Lock()

    @property
    def canonical_locale(self) -> LocaleCode:
        """Locale recorded in every published table."""
        return self._canonical_locale

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales requested from the loader on reload()."""
        return self._locales

    @property
    def is_loaded(self) -> bool:
        """Whether a table has been published."""
        return self._table is not None

    @property
    def table(self) -> TranslationTable:
        """The current table.

        Raises:
            ValueError: If nothing has been published yet
        """
        table = self._table
        if table is None:
            msg = "No translation table published; call publish() or reload() first"
            raise ValueError(msg)
        return table

    def publish(self, authoring_map: Mapping[str, object]) -> TranslationTable:
        """Compile an authoring map and make it the current table.

        Args:
            authoring_map: Nested mapping locale -> namespace... -> leaf -> text

        Returns:
            The newly published table

        Raises:
            MalformedPathError: If compilation fails; the current table is
                left in place
        """
        with self._write_lock:
            table = self._compiler.compile(self._canonical_locale, authoring_map)
            self._table = table
        logger.debug(
            "Published translation table: %d entries across %d locales",
            table.entry_count,
            len(table.locales),
        )
        return table

    def reload(self) -> TranslationTable:
        """Load authoring sources from the loader and publish them.

        Returns:
            The newly published table

        Raises:
            ValueError: If the store has no loader
            MalformedPathError: If compilation fails; the current table is
                left in place
        """
        if self._loader is None:
            msg = "reload() requires a loader"
            raise ValueError(msg)
        return self.publish(load_authoring_map(self._loader, self._locales))

    def __repr__(self) -> str:
        return (
            f"TranslationStore(canonical_locale={self._canonical_locale!r}, "
            f"locales={list(self._locales)!r}, loaded={self.is_loaded})"
        )
