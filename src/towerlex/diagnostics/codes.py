"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Compilation errors (authoring map structure)
        2000-2999: Formatting errors (message patterns, locale formatting)
        3000-3999: Parsing errors (locale-aware input parsing)
        4000-4999: Context errors (working context binding)
    """

    # Compilation errors (1000-1999)
    PATH_TOO_SHORT = 1001
    UNKNOWN_DECORATOR = 1002
    LEAF_NOT_TEXT = 1003
    EMPTY_SEGMENT = 1004

    # Formatting errors (2000-2999)
    PATTERN_UNBALANCED = 2001
    PATTERN_BAD_INDEX = 2002
    PATTERN_UNKNOWN_TYPE = 2003
    PATTERN_BAD_CHOICE = 2004
    FORMATTING_FAILED = 2005

    # Parsing errors (3000-3999)
    PARSE_NUMBER_FAILED = 3001
    PARSE_DATE_FAILED = 3002
    PARSE_TIME_FAILED = 3003
    PARSE_CURRENCY_FAILED = 3004

    # Context errors (4000-4999)
    CONTEXT_NOT_BOUND = 4001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        location: Where the problem was found (authoring path, pattern offset)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Example output:
            error[PATH_TOO_SHORT]: Authoring path too short: en -> 'Hello'
              --> en
              = help: Place texts under at least one leaf name

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.location is not None:
            lines.append(f"  --> {self.location}")
        if self.hint is not None:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
