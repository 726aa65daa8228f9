"""String transforms applied to translation text.

HTML escaping is the default safety rule for compiled text. The markdown
support is deliberately inline-only: emphasis, nothing block-level.

Python 3.13+. Zero external dependencies.
"""

import html
import re
import unicodedata

__all__ = [
    "escape_html",
    "inline_markdown_to_html",
    "normalize_text",
]

# Strong before emphasis: "**x**" must not be read as two empty "*" spans.
# Markers hug their text, so "2 * 3 * 4" stays arithmetic.
_INLINE_MARKDOWN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(?!\s)(.+?)(?<!\s)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__(?!\s)(.+?)(?<!\s)__"), r"<strong>\1</strong>"),
    (re.compile(r"\*(?!\s)(.+?)(?<!\s)\*"), r"<em>\1</em>"),
    (re.compile(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)"), r"<em>\1</em>"),
)


def escape_html(text: str) -> str:
    """Escape HTML special characters.

    Example:
        >>> escape_html('Hello & <welcome> "friend"')
        'Hello &amp; &lt;welcome&gt; &quot;friend&quot;'
    """
    return html.escape(text, quote=True)


def inline_markdown_to_html(text: str) -> str:
    """Expand inline markdown emphasis into HTML tags.

    Supports ``**strong**``, ``__strong__``, ``*em*`` and ``_em_``.
    Single-underscore emphasis must not touch word characters, so
    identifiers like ``snake_case_name`` pass through unchanged.

    The input should already be HTML-escaped; this function only adds tags.

    Example:
        >>> inline_markdown_to_html("**Sign out** or *stay*")
        '<strong>Sign out</strong> or <em>stay</em>'
    """
    for pattern, replacement in _INLINE_MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def normalize_text(text: str) -> str:
    """Transform text into NFC (W3C-recommended) composition form.

    Normalized text compares and sorts consistently, which matters when
    storing user input or matching it against translated labels.

    Example:
        >>> normalize_text("e\\u0301") == "\\u00e9"
        True
    """
    return unicodedata.normalize("NFC", text)
