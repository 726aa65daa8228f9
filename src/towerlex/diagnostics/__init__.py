"""Diagnostic codes and the towerlex exception hierarchy.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ContextNotBoundError,
    FormatError,
    FormattingError,
    LocaleParseError,
    MalformedPathError,
    TowerError,
)

__all__ = [
    "ContextNotBoundError",
    "Diagnostic",
    "DiagnosticCode",
    "FormatError",
    "FormattingError",
    "LocaleParseError",
    "MalformedPathError",
    "TowerError",
]
