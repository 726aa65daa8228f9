"""Working context for translation lookups.

A WorkingContext bundles what every lookup is evaluated against: the
working locale, the translation table, the current scope and the dev-mode
flag. Contexts are immutable; with_i18n() and with_scope() install a new
one for the duration of a block and restore the previous one on every exit
path, including exceptions.

    with with_i18n("en_US", table, scope="root"):
        t("buttons/login")              # root/buttons/login
        with with_scope("errors"):
            t("not_found")              # errors/not_found

ContextVar State:
    The installed context lives in a ContextVar, so every thread and every
    asyncio task sees its own binding and nothing leaks between unrelated
    operations. Code that prefers explicit passing can call
    towerlex.runtime.resolver.resolve() directly.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from towerlex.diagnostics import ContextNotBoundError, Diagnostic, DiagnosticCode
from towerlex.locale_utils import parse_locale
from towerlex.runtime.keys import ScopeLike, join_segments
from towerlex.table.types import LocaleCode, TranslationTable

if TYPE_CHECKING:
    from towerlex.runtime.resolver import MissHandler
    from towerlex.runtime.store import TranslationStore

__all__ = ["WorkingContext", "current_context", "with_i18n", "with_scope"]

_current_context: ContextVar[WorkingContext | None] = ContextVar(
    "towerlex_working_context", default=None
)


@dataclass(frozen=True, slots=True)
class WorkingContext:
    """Immutable (locale, table, scope, dev_mode) lookup context.

    Attributes:
        locale: Normalized working locale code
        source: Table, or a TranslationStore read at lookup time so reloads
            are picked up by contexts that outlive them
        scope: '/'-joined namespace prefix, or None
        dev_mode: Mark missing translations instead of falling back
        on_miss: Optional production miss callback
    """

    locale: LocaleCode
    source: TranslationTable | TranslationStore
    scope: str | None = None
    dev_mode: bool = False
    on_miss: MissHandler | None = None

    @property
    def table(self) -> TranslationTable:
        """The table lookups should read right now."""
        if isinstance(self.source, TranslationTable):
            return self.source
        return self.source.table


def _normalize_scope(scope: ScopeLike) -> str | None:
    if scope is None:
        return None
    return join_segments(scope) or None


def current_context() -> WorkingContext:
    """Return the installed working context.

    Raises:
        ContextNotBoundError: If called outside a with_i18n() block
    """
    ctx = _current_context.get()
    if ctx is None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.CONTEXT_NOT_BOUND,
            message="No working context installed",
            hint="Wrap the call in 'with with_i18n(locale, table):'",
        )
        raise ContextNotBoundError(diagnostic)
    return ctx


@contextmanager
def _installed(ctx: WorkingContext) -> Iterator[WorkingContext]:
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


@contextmanager
def with_i18n(
    locale: str | None,
    table: TranslationTable | TranslationStore,
    scope: ScopeLike = None,
    dev_mode: bool = False,
    *,
    on_miss: MissHandler | None = None,
) -> Iterator[WorkingContext]:
    """Execute a block with a working context installed.

    Args:
        locale: Working locale ('en_US', 'en-US'); None or blank selects
            the system locale
        table: Compiled table, or a TranslationStore for reload-aware lookups
        scope: Namespace prefix ('root/nav', ('root', 'nav')) or None
        dev_mode: Mark missing translations visibly
        on_miss: Optional production miss callback

    Yields:
        The installed WorkingContext
    """
    ctx = WorkingContext(
        locale=parse_locale(locale),
        source=table,
        scope=_normalize_scope(scope),
        dev_mode=dev_mode,
        on_miss=on_miss,
    )
    with _installed(ctx) as installed:
        yield installed


@contextmanager
def with_scope(scope: ScopeLike) -> Iterator[WorkingContext]:
    """Execute a block with only the translation scope replaced.

    Args:
        scope: New namespace prefix, or None to clear the scope

    Raises:
        ContextNotBoundError: If called outside a with_i18n() block
    """
    ctx = replace(current_context(), scope=_normalize_scope(scope))
    with _installed(ctx) as installed:
        yield installed
