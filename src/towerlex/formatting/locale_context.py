"""Locale context for thread-safe, cached number and date formatting.

This module wraps Babel's CLDR formatters behind one object per locale,
built once and reused. No dependency on Python's locale module (avoids
global state).

Architecture:
    - LocaleContext: Immutable per-locale formatter and parser
    - Explicit LRU cache of instances (OrderedDict + RLock)
    - Formatting raises FormattingError carrying a fallback value
    - Parsing returns (value | None, errors) tuples and never raises
    - String comparison through per-locale ICU collators

Python 3.13+. Uses Babel for i18n and PyICU for collation.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, TypeAlias, TypeVar

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from towerlex.constants import DEFAULT_LOCALE, MAX_LOCALE_CACHE_SIZE
from towerlex.diagnostics import Diagnostic, DiagnosticCode, FormattingError, LocaleParseError
from towerlex.enums import DateStyle
from towerlex.locale_utils import (
    get_babel_locale,
    get_collator,
    locale_fallback_chain,
    normalize_locale,
)

__all__ = ["LocaleContext"]

logger = logging.getLogger(__name__)

Number: TypeAlias = int | float | Decimal
StyleLike: TypeAlias = DateStyle | str
T = TypeVar("T")
ParseResult: TypeAlias = tuple[T | None, tuple[LocaleParseError, ...]]

_PERCENT_SIGNS = ("%", "٪", "‰")
_STYLES = frozenset(DateStyle)


def _first_known_locale(locale_code: str) -> Locale | None:
    """Return the Babel locale for the most specific code in the chain Babel knows."""
    for candidate in locale_fallback_chain(locale_code):
        try:
            return get_babel_locale(candidate)
        except (UnknownLocaleError, ValueError) as e:
            logger.debug("No locale data for '%s': %s", candidate, e)
    return None


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting and parsing.

    Use LocaleContext.create() to construct instances: it validates the
    locale and reuses cached instances. Direct construction bypasses both.

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create('de-DE')
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> # Invalid locales fall back to en_US with warning logged
        >>> ctx = LocaleContext.create('invalid-locale')
        >>> ctx.is_fallback
        True

    Thread Safety:
        Instances are immutable and shareable between threads. Cache
        operations are protected by RLock; construction is idempotent, so a
        race at worst builds an instance twice and keeps the first.
    """

    _cache: ClassVar[OrderedDict[str, "LocaleContext"]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext with graceful fallback for invalid locales.

        The locale's fallback chain is tried most specific first, so
        'de_AT_var1' formats like 'de_AT' when Babel has no data for the
        variant. When nothing in the chain is known, logs a warning and
        falls back to en_US while keeping the requested locale_code.
        This method always succeeds; use create_or_raise() for strict
        validation.

        Args:
            locale_code: Locale identifier (e.g., 'en_US', 'lv-LV')

        Returns:
            Cached or newly created LocaleContext
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        babel_locale = _first_known_locale(cache_key)
        used_fallback = babel_locale is None
        if babel_locale is None:
            logger.warning("Unknown locale '%s'. Falling back to %s", locale_code, DEFAULT_LOCALE)
            babel_locale = get_babel_locale(DEFAULT_LOCALE)

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @classmethod
    def create_or_raise(cls, locale_code: str) -> "LocaleContext":
        """Create LocaleContext or raise when no locale in its chain is known.

        Not cached.

        Raises:
            ValueError: If locale code is invalid or unknown
        """
        babel_locale = _first_known_locale(normalize_locale(locale_code))
        if babel_locale is None:
            msg = f"Unknown locale identifier '{locale_code}'"
            raise ValueError(msg)
        return cls(locale_code=locale_code, _babel_locale=babel_locale)

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this context."""
        return self._babel_locale

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def format_number(self, value: Number, *, pattern: str | None = None) -> str:
        """Format a number with locale-specific separators.

        Args:
            value: Number to format
            pattern: Custom CLDR number pattern (e.g., '#,##0.00')

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            return str(
                babel_numbers.format_decimal(value, format=pattern, locale=self.babel_locale)
            )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            msg = f"Number formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_integer(self, value: Number) -> str:
        """Format a number rounded half-even to an integer, with grouping.

        Example:
            >>> LocaleContext.create('en_US').format_integer(1234.5)
            '1,234'
        """
        return self.format_number(value, pattern="#,##0")

    def format_percent(self, value: Number) -> str:
        """Format a ratio as a percentage (0.25 -> '25%').

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            return str(babel_numbers.format_percent(value, locale=self.babel_locale))
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            msg = f"Percent formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def default_currency(self) -> str | None:
        """Return the current ISO 4217 currency of the locale's territory."""
        territory = self.babel_locale.territory
        if not territory:
            return None
        currencies = babel_numbers.get_territory_currencies(territory)
        return currencies[0] if currencies else None

    def format_currency(self, value: Number, currency: str | None = None) -> str:
        """Format a monetary amount.

        Args:
            value: Monetary amount
            currency: ISO 4217 code; defaults to the locale territory's currency

        Raises:
            FormattingError: If no currency is given and the locale has no
                territory, or the value cannot be formatted

        Example:
            >>> LocaleContext.create('en_US').format_currency(200)
            '$200.00'
        """
        code = currency or self.default_currency()
        if code is None:
            msg = f"No currency given and locale '{self.locale_code}' has no territory currency"
            raise FormattingError(msg, fallback_value=str(value))
        try:
            return str(
                babel_numbers.format_currency(
                    value, code, locale=self.babel_locale, currency_digits=True
                )
            )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            msg = f"Currency formatting failed for '{code} {value}': {e}"
            raise FormattingError(msg, fallback_value=f"{code} {value}") from e

    def _parse_error(
        self, code: DiagnosticCode, value: str, parse_type: str, reason: str
    ) -> tuple[None, tuple[LocaleParseError, ...]]:
        diagnostic = Diagnostic(
            code=code,
            message=f"Failed to parse {parse_type} '{value}' for locale '{self.locale_code}': "
            f"{reason}",
        )
        error = LocaleParseError(
            diagnostic,
            input_value=value,
            locale_code=self.locale_code,
            parse_type=parse_type,
        )
        return (None, (error,))

    def parse_number(self, value: str) -> ParseResult[Decimal]:
        """Parse a locale-formatted number to Decimal.

        Example:
            >>> LocaleContext.create('de_DE').parse_number("1.234,5")
            (Decimal('1234.5'), ())
        """
        try:
            return (babel_numbers.parse_decimal(value, locale=self.babel_locale), ())
        except (babel_numbers.NumberFormatError, InvalidOperation, ValueError) as e:
            return self._parse_error(DiagnosticCode.PARSE_NUMBER_FAILED, value, "number", str(e))

    def parse_integer(self, value: str) -> ParseResult[int]:
        """Parse a locale-formatted integer; fractional input is an error."""
        try:
            return (int(babel_numbers.parse_number(value, locale=self.babel_locale)), ())
        except (babel_numbers.NumberFormatError, ValueError) as e:
            return self._parse_error(DiagnosticCode.PARSE_NUMBER_FAILED, value, "integer", str(e))

    def parse_percent(self, value: str) -> ParseResult[Decimal]:
        """Parse a percentage ('25%' -> Decimal('0.25'))."""
        stripped = value.strip()
        for sign in _PERCENT_SIGNS:
            stripped = stripped.replace(sign, "")
        try:
            number = babel_numbers.parse_decimal(stripped.strip(), locale=self.babel_locale)
        except (babel_numbers.NumberFormatError, InvalidOperation, ValueError) as e:
            return self._parse_error(DiagnosticCode.PARSE_NUMBER_FAILED, value, "percent", str(e))
        return (number / 100, ())

    def parse_currency(self, value: str) -> ParseResult[Decimal]:
        """Parse a monetary amount, ignoring any currency symbol or code.

        Example:
            >>> LocaleContext.create('en_US').parse_currency("$1,200.50")
            (Decimal('1200.50'), ())
        """
        locale = self.babel_locale
        keep = {
            babel_numbers.get_decimal_symbol(locale),
            babel_numbers.get_group_symbol(locale),
            babel_numbers.get_minus_sign_symbol(locale),
            "-",
        }
        amount = "".join(ch for ch in value if ch.isdigit() or ch in keep)
        if not any(ch.isdigit() for ch in amount):
            return self._parse_error(
                DiagnosticCode.PARSE_CURRENCY_FAILED, value, "currency", "no digits"
            )
        try:
            return (babel_numbers.parse_decimal(amount, locale=locale), ())
        except (babel_numbers.NumberFormatError, InvalidOperation, ValueError) as e:
            return self._parse_error(
                DiagnosticCode.PARSE_CURRENCY_FAILED, value, "currency", str(e)
            )

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------

    def format_date(self, value: date, style: StyleLike = DateStyle.MEDIUM) -> str:
        """Format a date with a named style or a custom CLDR pattern.

        Example:
            >>> LocaleContext.create('en_US').format_date(date(2025, 10, 27), "short")
            '10/27/25'
        """
        try:
            return str(
                babel_dates.format_date(value, format=str(style), locale=self.babel_locale)
            )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            msg = f"Date formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_time(self, value: time | datetime, style: StyleLike = DateStyle.MEDIUM) -> str:
        """Format a time with a named style or a custom CLDR pattern."""
        try:
            return str(
                babel_dates.format_time(value, format=str(style), locale=self.babel_locale)
            )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            msg = f"Time formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_datetime(
        self,
        value: datetime,
        date_style: StyleLike = DateStyle.MEDIUM,
        time_style: StyleLike | None = None,
    ) -> str:
        """Format a datetime, combining date and time per the locale's CLDR pattern.

        Args:
            value: Datetime to format
            date_style: Date style, or a custom pattern when time_style is None
            time_style: Time style; defaults to date_style

        Example:
            >>> ctx = LocaleContext.create('en_US')
            >>> ctx.format_datetime(datetime(2025, 10, 27, 14, 30), "short", "short")
            '10/27/25, 2:30\\u202fPM'
        """
        if time_style is None and str(date_style) not in _STYLES:
            try:
                return str(
                    babel_dates.format_datetime(
                        value, format=str(date_style), locale=self.babel_locale
                    )
                )
            except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
                msg = f"DateTime formatting failed for '{value}': {e}"
                raise FormattingError(msg, fallback_value=value.isoformat()) from e

        date_str = self.format_date(value, date_style)
        time_str = self.format_time(value, time_style or date_style)
        # CLDR dateTimeFormat: {0} is the time, {1} the date
        datetime_pattern = (
            self.babel_locale.datetime_formats.get(str(date_style))
            or self.babel_locale.datetime_formats.get("medium")
            or "{1} {0}"
        )
        # Quoted literals such as "{1} 'at' {0}" lose their quotes
        combined = str(datetime_pattern).replace("'", "")
        return combined.replace("{0}", time_str).replace("{1}", date_str)

    def parse_date(self, value: str, style: StyleLike = DateStyle.SHORT) -> ParseResult[date]:
        """Parse a locale-formatted date ('10/27/25' -> date(2025, 10, 27))."""
        try:
            return (
                babel_dates.parse_date(value, locale=self.babel_locale, format=str(style)),
                (),
            )
        except (ValueError, IndexError) as e:
            return self._parse_error(DiagnosticCode.PARSE_DATE_FAILED, value, "date", str(e))

    def parse_time(self, value: str, style: StyleLike = DateStyle.SHORT) -> ParseResult[time]:
        """Parse a locale-formatted time ('2:30 PM' -> time(14, 30))."""
        try:
            return (
                babel_dates.parse_time(value, locale=self.babel_locale, format=str(style)),
                (),
            )
        except (ValueError, IndexError) as e:
            return self._parse_error(DiagnosticCode.PARSE_TIME_FAILED, value, "time", str(e))

    # ------------------------------------------------------------------
    # Collation
    # ------------------------------------------------------------------

    def compare(self, left: str, right: str) -> int:
        """Compare two strings by the locale's collation rules.

        Returns:
            Negative, zero or positive, like a classic cmp() function

        Example:
            >>> LocaleContext.create('sv_SE').compare("å", "z")
            1
        """
        return int(get_collator(str(self.babel_locale)).compare(left, right))

    def sort_key(self, value: str) -> bytes:
        """Collation key for sorted(..., key=ctx.sort_key)."""
        return bytes(get_collator(str(self.babel_locale)).getSortKey(value))
