"""Context-reading translator.

Python 3.13+.
"""

from towerlex.runtime.context import current_context
from towerlex.runtime.keys import KeyLike
from towerlex.runtime.resolver import resolve, resolve_formatted

__all__ = ["t"]


def t(key: KeyLike, *args: object) -> str:
    """Localized text translator.

    Takes a key within the current scope and returns the best translation
    available in the working locale. With additional arguments, treats the
    translated text as a message pattern (see format_message).

    In production mode, missing translations fall back to the canonical
    translation, or to "" if that's missing too.

    Args:
        key: Scoped key ('buttons/login' or ('buttons', 'login'))
        *args: Optional message pattern arguments

    Returns:
        Translated (and formatted) text

    Raises:
        ContextNotBoundError: If called outside a with_i18n() block
        FormatError: If args are given and the translation is not a valid pattern

    Example:
        >>> with with_i18n("en_US", table, scope="root"):
        ...     t("buttons/login")
        '<b>Sign in</b>'
    """
    ctx = current_context()
    if args:
        return resolve_formatted(
            key, args, ctx.scope, ctx.locale, ctx.table, ctx.dev_mode, on_miss=ctx.on_miss
        )
    return resolve(key, ctx.scope, ctx.locale, ctx.table, ctx.dev_mode, on_miss=ctx.on_miss)
