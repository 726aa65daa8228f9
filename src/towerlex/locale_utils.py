"""Locale identifier utilities.

Centralizes locale code normalization, system locale detection and the
locale fallback chain used by translation lookups. Locale codes are plain
strings of subtags joined by ``_`` (``en``, ``en_US``, ``en_US_var1``);
no semantic validation is performed on subtag values.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

from towerlex.constants import (
    DEFAULT_LOCALE,
    LOCALE_SEPARATOR,
    MAX_FALLBACK_CHAIN_CACHE_SIZE,
    MAX_LOCALE_CACHE_SIZE,
)

if TYPE_CHECKING:
    from babel import Locale
    from icu import Collator

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_collator",
    "get_system_locale",
    "locale_fallback_chain",
    "normalize_locale",
    "parse_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Case is preserved: translation tables are keyed by the exact code the
    author wrote, and "en_US" must keep matching "en_US".

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.strip().replace("-", LOCALE_SEPARATOR)


def parse_locale(locale_name: str | None) -> str:
    """Normalize a locale name, defaulting to the system locale.

    Args:
        locale_name: Locale name such as "en", "en_US", "en-US-var1".
            None or a blank string selects the system locale.

    Returns:
        Normalized locale code

    Example:
        >>> parse_locale("en-US")
        'en_US'
    """
    if locale_name is None or not locale_name.strip():
        return get_system_locale()
    return normalize_locale(locale_name)


@functools.lru_cache(maxsize=MAX_FALLBACK_CHAIN_CACHE_SIZE)
def locale_fallback_chain(locale_code: str) -> tuple[str, ...]:
    """Return locale codes to check, in order of preference.

    A locale with N subtags yields its N prefixes, longest first, so a more
    specific locale prefers its own translation before falling back to
    progressively more general ones.

    Memoized: each working locale is split once. The returned tuple is
    immutable and safe to share between threads.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Tuple of locale codes, most specific first

    Example:
        >>> locale_fallback_chain("en_US_var1")
        ('en_US_var1', 'en_US', 'en')
        >>> locale_fallback_chain("en")
        ('en',)
    """
    parts = [part for part in normalize_locale(locale_code).split(LOCALE_SEPARATOR) if part]
    return tuple(
        LOCALE_SEPARATOR.join(parts[:n]) for n in range(len(parts), 0, -1)
    )


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(locale_code: str) -> Locale:
    """Return the Babel Locale for a code, parsed once per distinct code.

    Raises:
        babel.UnknownLocaleError: If CLDR has no data for the locale
        ValueError: If the code is not a well-formed identifier

    Example:
        >>> get_babel_locale("en-US").territory
        'US'
    """
    # Babel reads CLDR data on import; only pay for it when formatting
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_collator(locale_code: str) -> Collator:
    """Return the ICU collator for a locale, built once per distinct code.

    ICU uses the root collation order for locales it has no tailoring for.
    Comparison on a shared collator is safe across threads.

    Example:
        >>> sorted(["z", "å", "a"], key=get_collator("sv_SE").getSortKey)
        ['a', 'z', 'å']
    """
    import icu  # noqa: PLC0415

    return icu.Collator.createInstance(icu.Locale(normalize_locale(locale_code)))


def clear_locale_cache() -> None:
    """Clear memoized Babel locales, ICU collators and fallback chains.

    Use in tests or after changing locale data at runtime.
    """
    get_babel_locale.cache_clear()
    get_collator.cache_clear()
    locale_fallback_chain.cache_clear()


_PSEUDO_LOCALES = frozenset({"C", "POSIX"})
_ENVIRONMENT_VARIABLES = ("LC_ALL", "LC_MESSAGES", "LANG")


def _posix_code(raw: str | None) -> str | None:
    """Reduce 'de_DE.UTF-8@euro' to 'de_DE'; None for pseudo-locales."""
    if not raw:
        return None
    code = raw.split(".", 1)[0].split("@", 1)[0].strip()
    if not code or code in _PSEUDO_LOCALES:
        return None
    return normalize_locale(code)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Work out the locale the process runs under.

    Asks locale.getlocale() first, then the LC_ALL, LC_MESSAGES and LANG
    environment variables in that order. The C and POSIX pseudo-locales
    count as "not set"; encoding and modifier suffixes are dropped.

    Args:
        raise_on_failure: Raise RuntimeError instead of returning en_US
            when nothing usable is found

    Raises:
        RuntimeError: If raise_on_failure is True and no locale is set
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        detected = _posix_code(locale_module.getlocale()[0])
    except (ValueError, AttributeError):
        detected = None
    if detected is not None:
        return detected

    for name in _ENVIRONMENT_VARIABLES:
        detected = _posix_code(os.environ.get(name))
        if detected is not None:
            return detected

    if raise_on_failure:
        msg = f"Could not determine system locale; set one of {', '.join(_ENVIRONMENT_VARIABLES)}"
        raise RuntimeError(msg)
    logger.debug("No system locale set; using %s", DEFAULT_LOCALE)
    return DEFAULT_LOCALE
