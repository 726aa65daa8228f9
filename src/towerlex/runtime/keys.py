"""Translation key and scope qualification.

Keys and scopes are accepted either as '/'-joined strings ("root/buttons")
or as segment sequences (["root", "buttons"]).

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from typing import TypeAlias

from towerlex.constants import KEY_SEPARATOR

__all__ = ["KeyLike", "ScopeLike", "join_segments", "qualify_key"]

KeyLike: TypeAlias = str | Sequence[str]
"""Scoped key: 'buttons/login' or ('buttons', 'login')."""

ScopeLike: TypeAlias = str | Sequence[str] | None
"""Namespace prefix: 'root', ('root', 'nav') or None for no scope."""


def join_segments(segments: KeyLike) -> str:
    """Join key segments with '/'; strings pass through unchanged.

    Example:
        >>> join_segments(("root", "buttons", "login"))
        'root/buttons/login'
    """
    if isinstance(segments, str):
        return segments
    return KEY_SEPARATOR.join(segments)


def qualify_key(key: KeyLike, scope: ScopeLike = None) -> str:
    """Compute the fully-qualified key for a lookup.

    A present, non-empty scope is prefixed to the key. Without a scope the
    key is assumed to be fully qualified already.

    Example:
        >>> qualify_key("buttons/login", "root")
        'root/buttons/login'
        >>> qualify_key(("c",), ("a", "b"))
        'a/b/c'
        >>> qualify_key("a/b/c")
        'a/b/c'
    """
    qualified = join_segments(key)
    if scope is None:
        return qualified
    prefix = join_segments(scope)
    if not prefix:
        return qualified
    return f"{prefix}{KEY_SEPARATOR}{qualified}"
