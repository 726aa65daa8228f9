"""Formatting helpers bound to the working context's locale.

Each helper looks up the installed WorkingContext and delegates to the
cached LocaleContext for its locale:

    with with_i18n("en_ZA", table):
        format_currency(200)             # 'R200.00'
        format_date(date.today(), "full")
        sorted(names, key=sort_key)      # collation order of en_ZA

Python 3.13+.
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import TypeAlias

from towerlex.diagnostics import LocaleParseError
from towerlex.enums import DateStyle
from towerlex.formatting.locale_context import LocaleContext
from towerlex.formatting.message import format_message
from towerlex.runtime.context import current_context

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Numbers
    "format_number",
    "format_integer",
    "format_percent",
    "format_currency",
    "parse_number",
    "parse_integer",
    "parse_percent",
    "parse_currency",
    # Dates and times
    "format_date",
    "format_time",
    "format_datetime",
    "parse_date",
    "parse_time",
    # Collation
    "u_compare",
    "sort_key",
    # Messages
    "format_msg",
]

Number: TypeAlias = int | float | Decimal


def _locale_context() -> LocaleContext:
    return LocaleContext.create(current_context().locale)


def format_number(value: Number) -> str:
    return _locale_context().format_number(value)


def format_integer(value: Number) -> str:
    return _locale_context().format_integer(value)


def format_percent(value: Number) -> str:
    return _locale_context().format_percent(value)


def format_currency(value: Number, currency: str | None = None) -> str:
    return _locale_context().format_currency(value, currency)


def parse_number(value: str) -> tuple[Decimal | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_number(value)


def parse_integer(value: str) -> tuple[int | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_integer(value)


def parse_percent(value: str) -> tuple[Decimal | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_percent(value)


def parse_currency(value: str) -> tuple[Decimal | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_currency(value)


def format_date(value: date, style: DateStyle | str = DateStyle.MEDIUM) -> str:
    return _locale_context().format_date(value, style)


def format_time(value: time | datetime, style: DateStyle | str = DateStyle.MEDIUM) -> str:
    return _locale_context().format_time(value, style)


def format_datetime(
    value: datetime,
    date_style: DateStyle | str = DateStyle.MEDIUM,
    time_style: DateStyle | str | None = None,
) -> str:
    return _locale_context().format_datetime(value, date_style, time_style)


def parse_date(
    value: str, style: DateStyle | str = DateStyle.SHORT
) -> tuple[date | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_date(value, style)


def parse_time(
    value: str, style: DateStyle | str = DateStyle.SHORT
) -> tuple[time | None, tuple[LocaleParseError, ...]]:
    return _locale_context().parse_time(value, style)


def u_compare(left: str, right: str) -> int:
    """Compare two strings by the working locale's collation rules.

    Usable with functools.cmp_to_key; prefer sort_key for sorting.
    """
    return _locale_context().compare(left, right)


def sort_key(value: str) -> bytes:
    return _locale_context().sort_key(value)


def format_msg(pattern: str, *args: object) -> str:
    """Format a message pattern in the working locale.

    Raises:
        FormatError: If the pattern is malformed
        ContextNotBoundError: If called outside a with_i18n() block
    """
    return format_message(pattern, *args, locale=current_context().locale)
