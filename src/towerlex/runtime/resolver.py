"""Translation key resolution with locale fallback.

Resolution Algorithm:
    1. Qualify the key with the scope: root + buttons/login -> root/buttons/login
    2. Build the locale fallback chain: en_US_var1 -> (en_US_var1, en_US, en)
    3. Return the first entry found along the chain
    4. On a miss:
       - dev mode: return a visibly marked placeholder, **root/buttons/login**
       - production: report the miss, then return the canonical locale's
         entry, or "" if that is missing too

A miss never raises. Lookups are pure functions of their inputs and the
(immutable) table, so they are safe to run concurrently.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from towerlex.constants import DEV_MISSING_TRANSLATION, PRODUCTION_MISSING_TRANSLATION
from towerlex.formatting.message import format_message
from towerlex.locale_utils import locale_fallback_chain
from towerlex.runtime.keys import KeyLike, ScopeLike, qualify_key
from towerlex.table.types import LocaleCode, TranslationKey, TranslationTable

__all__ = ["MissHandler", "MissInfo", "resolve", "resolve_formatted"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MissInfo:
    """Information about a translation missing at every fallback level.

    Provided to the on_miss callback in production mode.

    Attributes:
        key: Fully-qualified key that was looked up
        locale: Working locale of the lookup
        chain: Locales searched, most specific first
        canonical_locale: Locale consulted as last resort
        used_canonical: Whether the canonical locale supplied the text

    Example:
        >>> def count_miss(info: MissInfo) -> None:
        ...     metrics.increment("i18n.miss", tags={"locale": info.locale})
    """

    key: TranslationKey
    locale: LocaleCode
    chain: tuple[LocaleCode, ...]
    canonical_locale: LocaleCode
    used_canonical: bool


MissHandler: TypeAlias = Callable[[MissInfo], None]


def _report_miss(info: MissInfo, on_miss: MissHandler | None) -> None:
    logger.warning("Missing translation '%s' for locale '%s'", info.key, info.locale)
    if on_miss is None:
        return
    try:
        on_miss(info)
    except Exception:  # noqa: BLE001 - a reporting failure must not break lookup
        logger.exception("on_miss callback failed for '%s'", info.key)


def resolve(
    key: KeyLike,
    scope: ScopeLike,
    locale: LocaleCode,
    table: TranslationTable,
    dev_mode: bool = False,
    *,
    on_miss: MissHandler | None = None,
) -> str:
    """Return the best translation available for a key.

    Args:
        key: Scoped key, 'buttons/login' or ('buttons', 'login')
        scope: Namespace prefix, or None when key is fully qualified
        locale: Working locale (e.g., 'en_US')
        table: Compiled translation table
        dev_mode: Mark missing translations visibly instead of falling back
        on_miss: Optional callback receiving a MissInfo for each production miss

    Returns:
        Translated text; in dev mode a '**key**' placeholder for misses; in
        production the canonical text or '' for misses

    Example:
        >>> table = compile_translation_table("en", {"en": {"root": {"hi": "Hello"}}})
        >>> resolve("hi", "root", "en_US", table)
        'Hello'
        >>> resolve("bye", "root", "en_US", table, dev_mode=True)
        '**root/bye**'
    """
    fq_key = qualify_key(key, scope)
    chain = locale_fallback_chain(locale)

    for candidate in chain:
        text = table.get(candidate, fq_key)
        if text is not None:
            return text

    if dev_mode:
        return DEV_MISSING_TRANSLATION.format(key=fq_key)

    canonical = table.get_canonical(fq_key)
    _report_miss(
        MissInfo(
            key=fq_key,
            locale=locale,
            chain=chain,
            canonical_locale=table.canonical_locale,
            used_canonical=canonical is not None,
        ),
        on_miss,
    )
    return canonical if canonical is not None else PRODUCTION_MISSING_TRANSLATION


def resolve_formatted(
    key: KeyLike,
    args: Sequence[object],
    scope: ScopeLike,
    locale: LocaleCode,
    table: TranslationTable,
    dev_mode: bool = False,
    *,
    on_miss: MissHandler | None = None,
) -> str:
    """Resolve a key, then use its text as a message pattern for args.

    Args:
        key: Scoped key
        args: Positional pattern arguments ({0}, {1}, ...)
        scope: Namespace prefix, or None
        locale: Working locale, also used for number/date formatting
        table: Compiled translation table
        dev_mode: Mark missing translations visibly
        on_miss: Optional production miss callback

    Returns:
        Formatted text

    Raises:
        FormatError: If the resolved pattern is malformed (propagated from
            format_message unchanged)

    Example:
        >>> resolve_formatted("greet", ["Anna"], None, "en", table)
        'Hello, Anna!'
    """
    pattern = resolve(key, scope, locale, table, dev_mode, on_miss=on_miss)
    return format_message(pattern, *args, locale=locale)
