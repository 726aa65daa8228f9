"""Enumerations for towerlex type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Decorator(StrEnum):
    """Text-processing rule selected by an authoring leaf's name suffix.

    Parsed once per leaf at compile time and never consulted at lookup time.

    StrEnum provides automatic string conversion: str(Decorator.HTML) == "html"
    """

    HTML = "html"
    """Trusted markup: login.html = "<b>Sign in</b>" (passed through unchanged)"""

    MARKDOWN = "md"
    """Inline markdown: logout.md = "**Sign out**" (escaped, then expanded)"""

    NOTE = "note"
    """Translator note: login.note = "Title of login button" (discarded)"""

    DEFAULT = "default"
    """No decorator: message = "Hello & welcome." (escaped)"""

    @classmethod
    def from_token(cls, token: str) -> "Decorator | None":
        """Return the decorator named by an authoring suffix token.

        Args:
            token: Suffix after the decorator separator (e.g., "html", "md")

        Returns:
            Matching Decorator, or None if the token is not a decorator.
            DEFAULT is never returned: it has no authoring token.
        """
        match token:
            case "html":
                return cls.HTML
            case "md":
                return cls.MARKDOWN
            case "note":
                return cls.NOTE
            case _:
                return None


class DateStyle(StrEnum):
    """Named date/time format styles.

    StrEnum provides automatic string conversion: str(DateStyle.SHORT) == "short"
    """

    SHORT = "short"
    """Numeric: 10/27/25"""

    MEDIUM = "medium"
    """Abbreviated: Oct 27, 2025"""

    LONG = "long"
    """Full month name: October 27, 2025"""

    FULL = "full"
    """With weekday: Monday, October 27, 2025"""


__all__ = [
    "DateStyle",
    "Decorator",
]
