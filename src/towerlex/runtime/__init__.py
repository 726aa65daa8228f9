"""Translation lookup runtime.

Submodules:
    keys       - key/scope qualification
    resolver   - resolve, resolve_formatted, MissInfo (explicit-argument lookups)
    context    - WorkingContext, with_i18n, with_scope, current_context
    store      - TranslationStore (publish-by-replacement reloads)
    translator - t (context-reading lookups)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from towerlex.runtime.context import WorkingContext, current_context, with_i18n, with_scope
from towerlex.runtime.keys import KeyLike, ScopeLike, join_segments, qualify_key
from towerlex.runtime.resolver import MissHandler, MissInfo, resolve, resolve_formatted
from towerlex.runtime.store import TranslationStore
from towerlex.runtime.translator import t

__all__ = [
    # Explicit-argument lookups
    "resolve",
    "resolve_formatted",
    "MissInfo",
    "MissHandler",
    # Keys
    "qualify_key",
    "join_segments",
    "KeyLike",
    "ScopeLike",
    # Working context
    "WorkingContext",
    "current_context",
    "with_i18n",
    "with_scope",
    "t",
    # Reloadable tables
    "TranslationStore",
]
