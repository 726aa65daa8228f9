"""Message pattern formatting with positional arguments.

Implements the MessageFormat-style pattern subset used by translated text:

    {0}                          argument 0, formatted by type
    {0,number}                   locale number
    {0,number,integer}           rounded, grouped integer
    {0,number,percent}           percentage
    {0,number,currency}          currency of the locale's territory
    {0,number,#,##0.00}          custom CLDR number pattern
    {0,date} / {0,date,short}    date, styles short|medium|long|full or a pattern
    {0,time} / {0,time,long}     time, same styles
    {0,choice,0#no cats|1#one cat|1<{0,number} cats}

Quoting:
    '' is a literal apostrophe. A single apostrophe starts a quoted literal
    only when followed by a syntax character ({ } # |) so ordinary text like
    "Don't" needs no escaping. A quoted literal ends at the next apostrophe.

An argument index beyond the supplied arguments is left in the output as
"{n}". Malformed patterns raise FormatError.

Python 3.13+. Uses Babel (via LocaleContext) for locale-aware values.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from towerlex.diagnostics import Diagnostic, DiagnosticCode, FormatError, FormattingError
from towerlex.enums import DateStyle
from towerlex.formatting.locale_context import LocaleContext

__all__ = ["format_message"]

_QUOTE = "'"
_SYNTAX_CHARS = frozenset("{}#|")
_FORMAT_TYPES = frozenset({"number", "date", "time", "choice"})
_INFINITY = "∞"
_CHOICE_SEPARATORS = frozenset("#≤<")


@dataclass(frozen=True, slots=True)
class _Placeholder:
    """Parsed {index[,type[,style]]} element."""

    source: str
    index: int
    format_type: str | None
    style: str | None


def _error(code: DiagnosticCode, message: str, pattern: str) -> FormatError:
    diagnostic = Diagnostic(code=code, message=message, location=repr(pattern))
    return FormatError(diagnostic, pattern=pattern)


def _unquoted(text: str, start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield (position, char) for every character outside quoted literals."""
    in_quote = False
    pos = start
    length = len(text)
    while pos < length:
        ch = text[pos]
        nxt = text[pos + 1] if pos + 1 < length else ""
        if ch == _QUOTE:
            if nxt == _QUOTE:
                pos += 2
                continue
            if in_quote:
                in_quote = False
            elif nxt in _SYNTAX_CHARS:
                in_quote = True
        elif not in_quote:
            yield pos, ch
        pos += 1


def _find_closing_brace(pattern: str, start: int) -> int:
    depth = 0
    for pos, ch in _unquoted(pattern, start):
        match ch:
            case "{":
                depth += 1
            case "}":
                depth -= 1
                if depth == 0:
                    return pos
    raise _error(
        DiagnosticCode.PATTERN_UNBALANCED,
        f"Unmatched '{{' at position {start}",
        pattern,
    )


def _parse_placeholder(body: str, pattern: str) -> _Placeholder:
    parts = body.split(",", 2)
    index_text = parts[0].strip()
    if not (index_text.isascii() and index_text.isdigit()):
        raise _error(
            DiagnosticCode.PATTERN_BAD_INDEX,
            f"Argument index must be a non-negative integer, got {index_text!r}",
            pattern,
        )

    format_type = parts[1].strip().lower() if len(parts) > 1 else None
    if format_type is not None and format_type not in _FORMAT_TYPES:
        raise _error(
            DiagnosticCode.PATTERN_UNKNOWN_TYPE,
            f"Unknown format type {format_type!r}",
            pattern,
        )
    style = parts[2].strip() if len(parts) > 2 else None
    if format_type == "choice" and not style:
        raise _error(DiagnosticCode.PATTERN_BAD_CHOICE, "Choice format needs a style", pattern)

    return _Placeholder(
        source=f"{{{body}}}", index=int(index_text), format_type=format_type, style=style or None
    )


def _tokenize(pattern: str) -> list[str | _Placeholder]:
    tokens: list[str | _Placeholder] = []
    buffer: list[str] = []
    in_quote = False
    pos = 0
    length = len(pattern)

    while pos < length:
        ch = pattern[pos]
        nxt = pattern[pos + 1] if pos + 1 < length else ""

        if ch == _QUOTE:
            if nxt == _QUOTE:
                buffer.append(_QUOTE)
                pos += 2
            elif in_quote:
                in_quote = False
                pos += 1
            elif nxt in _SYNTAX_CHARS:
                in_quote = True
                pos += 1
            else:
                buffer.append(_QUOTE)
                pos += 1
            continue

        if in_quote:
            buffer.append(ch)
        elif ch == "{":
            end = _find_closing_brace(pattern, pos)
            if buffer:
                tokens.append("".join(buffer))
                buffer.clear()
            tokens.append(_parse_placeholder(pattern[pos + 1 : end], pattern))
            pos = end
        elif ch == "}":
            raise _error(
                DiagnosticCode.PATTERN_UNBALANCED,
                f"Unmatched '}}' at position {pos}",
                pattern,
            )
        else:
            buffer.append(ch)
        pos += 1

    if buffer:
        tokens.append("".join(buffer))
    return tokens


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _split_choices(style: str) -> list[str]:
    choices: list[str] = []
    depth = 0
    start = 0
    for pos, ch in _unquoted(style):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == "|" and depth == 0:
            choices.append(style[start:pos])
            start = pos + 1
    choices.append(style[start:])
    return choices


def _parse_limit(text: str, pattern: str) -> float:
    text = text.strip()
    if text in (_INFINITY, f"+{_INFINITY}"):
        return math.inf
    if text == f"-{_INFINITY}":
        return -math.inf
    try:
        return float(text)
    except ValueError:
        raise _error(
            DiagnosticCode.PATTERN_BAD_CHOICE, f"Invalid choice limit {text!r}", pattern
        ) from None


def _select_choice(value: float, style: str, pattern: str) -> str:
    """Pick the choice text whose limit range contains value.

    'n#text' matches value >= n; 'n<text' matches value > n. The last
    matching choice wins; values below every limit select the first choice.
    """
    selected: str | None = None
    for choice in _split_choices(style):
        split_at = next((pos for pos, ch in enumerate(choice) if ch in _CHOICE_SEPARATORS), -1)
        if split_at <= 0 or not choice[:split_at].strip():
            raise _error(
                DiagnosticCode.PATTERN_BAD_CHOICE, f"Invalid choice {choice!r}", pattern
            )
        limit_text, separator, text = choice[:split_at], choice[split_at], choice[split_at + 1 :]
        limit = _parse_limit(limit_text, pattern)
        if selected is None:
            selected = text
        if value > limit or (separator != "<" and value == limit):
            selected = text
    return selected or ""


def _format_default(value: object, ctx: LocaleContext) -> str:
    if _is_number(value):
        return ctx.format_number(value)  # type: ignore[arg-type]
    if isinstance(value, datetime):
        return ctx.format_datetime(value, DateStyle.SHORT, DateStyle.SHORT)
    if isinstance(value, date):
        return ctx.format_date(value, DateStyle.SHORT)
    if isinstance(value, time):
        return ctx.format_time(value, DateStyle.SHORT)
    return str(value)


def _format_number(value: object, style: str | None, ctx: LocaleContext) -> str:
    match style:
        case None:
            return ctx.format_number(value)  # type: ignore[arg-type]
        case "integer":
            return ctx.format_integer(value)  # type: ignore[arg-type]
        case "percent":
            return ctx.format_percent(value)  # type: ignore[arg-type]
        case "currency":
            return ctx.format_currency(value)  # type: ignore[arg-type]
        case _:
            return ctx.format_number(value, pattern=style)  # type: ignore[arg-type]


def _format_placeholder(
    placeholder: _Placeholder,
    args: tuple[object, ...],
    ctx: LocaleContext,
    pattern: str,
) -> str:
    if placeholder.index >= len(args):
        return placeholder.source

    value = args[placeholder.index]
    style = placeholder.style

    match placeholder.format_type:
        case None:
            return _format_default(value, ctx)
        case "number" if _is_number(value):
            return _format_number(value, style, ctx)
        case "date" if isinstance(value, date):
            return ctx.format_date(value, style or DateStyle.MEDIUM)
        case "time" if isinstance(value, (time, datetime)):
            return ctx.format_time(value, style or DateStyle.MEDIUM)
        case "choice" if _is_number(value):
            text = _select_choice(float(value), style or "", pattern)  # type: ignore[arg-type]
            if "{" in text or _QUOTE in text:
                return format_message(text, *args, locale=ctx.locale_code)
            return text
        case format_type:
            raise _error(
                DiagnosticCode.FORMATTING_FAILED,
                f"Cannot format argument {placeholder.index} "
                f"({type(value).__name__}) as {format_type}",
                pattern,
            )


def format_message(pattern: str, *args: object, locale: str) -> str:
    """Substitute positional arguments into a message pattern.

    Args:
        pattern: Message pattern, e.g. "You have {0,number,integer} new messages"
        *args: Positional arguments referenced as {0}, {1}, ...
        locale: Locale used for number and date formatting

    Returns:
        Formatted text

    Raises:
        FormatError: If the pattern is malformed or an argument does not fit
            its placeholder's format type

    Examples:
        >>> format_message("foobar {0}!", 102.22, locale="en")
        'foobar 102.22!'
        >>> format_message("foobar {0,number,integer}!", 102.22, locale="en")
        'foobar 102!'
        >>> format_message(
        ...     "You have {0,choice,0#no cats|1#one cat|1<{0,number} cats}.", 0, locale="en"
        ... )
        'You have no cats.'
    """
    ctx = LocaleContext.create(locale)
    output: list[str] = []
    for token in _tokenize(pattern):
        if isinstance(token, str):
            output.append(token)
            continue
        try:
            output.append(_format_placeholder(token, args, ctx, pattern))
        except FormattingError as e:
            raise _error(DiagnosticCode.FORMATTING_FAILED, str(e), pattern) from e
    return "".join(output)
