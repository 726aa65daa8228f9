"""Locale-aware value and message formatting.

Submodules:
    locale_context - LocaleContext (cached Babel formatters and parsers)
    message        - format_message (MessageFormat-style patterns)
    functions      - helpers reading the working context's locale
                     (import explicitly: towerlex.formatting.functions)

Python 3.13+. Uses Babel for i18n.
"""

from towerlex.formatting.locale_context import LocaleContext
from towerlex.formatting.message import format_message

__all__ = ["LocaleContext", "format_message"]
