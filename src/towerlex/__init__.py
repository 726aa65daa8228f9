"""towerlex - translation tables with scoped keys and locale fallback.

Compiles a development-friendly nested authoring map into an immutable
locale -> key -> text table, and resolves scoped keys against it with a
most-specific-first locale fallback chain (en_US_var1 -> en_US -> en).

Public API:
    compile_translation_table - Authoring map to TranslationTable
    TranslationTable - Immutable compiled lookup table
    TranslationStore - Reloadable holder publishing tables by replacement
    resolve / resolve_formatted - Explicit-argument lookups
    with_i18n / with_scope / t - Context-bound lookups
    format_message - MessageFormat-style pattern substitution
    LocaleContext - Cached Babel number/date formatters

Exceptions:
    TowerError - Base exception class
    MalformedPathError - Authoring map cannot be compiled
    FormatError - Message pattern / argument mismatch

Submodules:
    towerlex.table - Compiler, leaf paths, authoring-map loaders
    towerlex.runtime - Resolver, working context, store
    towerlex.formatting - Locale formatting; .functions for context-bound helpers
    towerlex.locale_utils - Locale normalization and fallback chains
    towerlex.markup - HTML escaping and inline markdown
"""

from .diagnostics import (
    ContextNotBoundError,
    FormatError,
    FormattingError,
    LocaleParseError,
    MalformedPathError,
    TowerError,
)
from .enums import DateStyle, Decorator
from .formatting import LocaleContext, format_message
from .locale_utils import locale_fallback_chain, normalize_locale, parse_locale
from .runtime import (
    MissInfo,
    TranslationStore,
    WorkingContext,
    current_context,
    resolve,
    resolve_formatted,
    t,
    with_i18n,
    with_scope,
)
from .table import PathAuthoringLoader, TableCompiler, TranslationTable, compile_translation_table

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("towerlex")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ContextNotBoundError",
    "DateStyle",
    "Decorator",
    "FormatError",
    "FormattingError",
    "LocaleContext",
    "LocaleParseError",
    "MalformedPathError",
    "MissInfo",
    "PathAuthoringLoader",
    "TableCompiler",
    "TowerError",
    "TranslationStore",
    "TranslationTable",
    "WorkingContext",
    "__version__",
    "compile_translation_table",
    "current_context",
    "format_message",
    "locale_fallback_chain",
    "normalize_locale",
    "parse_locale",
    "resolve",
    "resolve_formatted",
    "t",
    "with_i18n",
    "with_scope",
]
