"""towerlex exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Hierarchy:
    TowerError
    ├─ MalformedPathError (compile time, authoring map structure)
    ├─ FormatError (message pattern / argument mismatch)
    ├─ FormattingError (locale-aware number/date formatting failure)
    ├─ LocaleParseError (locale-aware input parsing failure, returned not raised)
    └─ ContextNotBoundError (lookup outside a working context)

A missing translation is NOT an error: lookups degrade to a placeholder,
the canonical text, or the empty string.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic


class TowerError(Exception):
    """Base exception for all towerlex errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TowerError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class MalformedPathError(TowerError):
    """Authoring map leaf path cannot be compiled.

    Raised at compile time, never at lookup time. The table is never
    half-built: compilation aborts on the first malformed path.

    Attributes:
        path: Offending leaf path segments (locale first, text excluded)
    """

    def __init__(self, message: str | Diagnostic, *, path: Sequence[str] = ()) -> None:
        """Initialize MalformedPathError.

        Args:
            message: Error message string OR Diagnostic object
            path: Offending leaf path segments
        """
        super().__init__(message)
        self.path: tuple[str, ...] = tuple(path)


class FormatError(TowerError):
    """Message pattern and arguments do not fit together.

    Raised by format_message() and propagated unchanged by
    resolve_formatted() and t().

    Attributes:
        pattern: The pattern that failed to format
    """

    def __init__(self, message: str | Diagnostic, *, pattern: str = "") -> None:
        """Initialize FormatError.

        Args:
            message: Error message string OR Diagnostic object
            pattern: The pattern that failed to format
        """
        super().__init__(message)
        self.pattern = pattern


class FormattingError(TowerError):
    """Raised when locale-aware formatting fails.

    The error carries a fallback_value (usually the unformatted value) that
    callers may display instead of failing outright.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value


class LocaleParseError(TowerError):
    """Error during locale-aware parsing of numbers, dates and times.

    Returned in the errors tuple of parse_* helpers rather than raised,
    consistent with their (result, errors) return convention.

    Attributes:
        input_value: The string that failed to parse
        locale_code: The locale used for parsing
        parse_type: Type of parsing attempted ('number', 'integer', 'percent',
            'currency', 'date', 'time')

    Example:
        >>> result, errors = LocaleContext.create("en_US").parse_number("invalid")
        >>> if errors:
        ...     for error in errors:
        ...         print(f"Parse failed: {error.input_value} ({error.parse_type})")
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        input_value: str = "",
        locale_code: str = "",
        parse_type: str = "",
    ) -> None:
        """Initialize LocaleParseError.

        Args:
            message: Error message string OR Diagnostic object
            input_value: The string that failed to parse
            locale_code: The locale used for parsing
            parse_type: Type of parsing attempted
        """
        super().__init__(message)
        self.input_value = input_value
        self.locale_code = locale_code
        self.parse_type = parse_type


class ContextNotBoundError(TowerError):
    """Context-reading helper called outside a with_i18n() block."""
