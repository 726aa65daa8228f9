"""Shared constants for towerlex.

Centralizes delimiters, fallback strings and cache bounds used across the
table, runtime and formatting packages. Placing constants here avoids
circular imports between those packages.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Delimiters
    "KEY_SEPARATOR",
    "LOCALE_SEPARATOR",
    "DECORATOR_SLOT_SEPARATOR",
    "DECORATOR_SUFFIX_SEPARATOR",
    # Fallback strings
    "DEV_MISSING_TRANSLATION",
    "PRODUCTION_MISSING_TRANSLATION",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_FALLBACK_CHAIN_CACHE_SIZE",
    # Locale defaults
    "DEFAULT_LOCALE",
]

# ============================================================================
# DELIMITERS
# ============================================================================

# Joins namespace segments into a fully-qualified key: root/buttons/login
KEY_SEPARATOR: str = "/"

# Joins locale subtags: en_US_var1
LOCALE_SEPARATOR: str = "_"

# Decorator slot: "login.html", "title.txt" (any token after "." is a decorator)
DECORATOR_SLOT_SEPARATOR: str = "."

# Decorator suffix: "login_html" (stripped only for known tokens, so "first_name" stays)
DECORATOR_SUFFIX_SEPARATOR: str = "_"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Dev-mode placeholder for a key missing at every fallback level.
# Format string - use .format(key=...)
DEV_MISSING_TRANSLATION: str = "**{key}**"

# Production-mode value when even the canonical locale lacks the key.
PRODUCTION_MISSING_TRANSLATION: str = ""

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum memoized fallback chains (one per distinct working locale).
MAX_FALLBACK_CHAIN_CACHE_SIZE: int = 256

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Used when the system locale cannot be determined and for unknown locales
# in LocaleContext.
DEFAULT_LOCALE: str = "en_US"
