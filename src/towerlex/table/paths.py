"""Leaf-path extraction from nested authoring maps.

An authoring map is walked depth-first in insertion order. Every string
leaf yields one LeafPath:

    {"en": {"root": {"buttons": {"login.html": "<b>Sign in</b>"}}}}
    => LeafPath(locale="en", namespaces=("root", "buttons"),
                name="login", decorator=Decorator.HTML, text="<b>Sign in</b>")

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from towerlex.constants import (
    DECORATOR_SLOT_SEPARATOR,
    DECORATOR_SUFFIX_SEPARATOR,
    KEY_SEPARATOR,
)
from towerlex.diagnostics import Diagnostic, DiagnosticCode, MalformedPathError
from towerlex.enums import Decorator
from towerlex.locale_utils import normalize_locale

__all__ = ["LeafPath", "leaf_paths", "split_decorator"]

# [locale, leaf-name, text]
_MIN_PATH_LENGTH = 3


@dataclass(frozen=True, slots=True)
class LeafPath:
    """One compiled-ready leaf of an authoring map.

    Attributes:
        locale: Normalized locale code (first path segment)
        namespaces: Segments between the locale and the leaf name
        name: Leaf base name with any decorator suffix removed
        decorator: Text-processing rule for this leaf
        text: Raw authored text
    """

    locale: str
    namespaces: tuple[str, ...]
    name: str
    decorator: Decorator
    text: str

    @property
    def key(self) -> str:
        """Fully-qualified key: namespaces and base name joined by '/'."""
        return KEY_SEPARATOR.join((*self.namespaces, self.name))


def split_decorator(leaf_name: str, *, strict: bool = False) -> tuple[str, Decorator]:
    """Split an authoring leaf name into base name and decorator.

    Grammar is ``name[.|_]decorator``:

    - A ``.`` suffix always occupies the decorator slot and is stripped.
      Unknown tokens fall back to Decorator.DEFAULT, or raise in strict mode.
    - A ``_`` suffix is stripped only when it is a known decorator token,
      so ordinary names like ``first_name`` keep their underscore.

    Args:
        leaf_name: Leaf name as authored (e.g., "login.html", "logout_md")
        strict: Reject unknown ``.`` suffixes instead of ignoring them

    Returns:
        Tuple of (base_name, decorator)

    Raises:
        MalformedPathError: In strict mode, for an unknown ``.`` suffix

    Example:
        >>> split_decorator("login.html")
        ('login', <Decorator.HTML: 'html'>)
        >>> split_decorator("first_name")
        ('first_name', <Decorator.DEFAULT: 'default'>)
    """
    base, dot, token = leaf_name.rpartition(DECORATOR_SLOT_SEPARATOR)
    if dot and base:
        decorator = Decorator.from_token(token)
        if decorator is None:
            if strict:
                diagnostic = Diagnostic(
                    code=DiagnosticCode.UNKNOWN_DECORATOR,
                    message=f"Unknown decorator '{token}' on leaf '{leaf_name}'",
                    hint="Use one of: html, md, note",
                    location=leaf_name,
                )
                raise MalformedPathError(diagnostic, path=(leaf_name,))
            decorator = Decorator.DEFAULT
        return base, decorator

    base, underscore, token = leaf_name.rpartition(DECORATOR_SUFFIX_SEPARATOR)
    if underscore and base:
        decorator = Decorator.from_token(token)
        if decorator is not None:
            return base, decorator

    return leaf_name, Decorator.DEFAULT


def _malformed(code: DiagnosticCode, message: str, path: tuple[str, ...]) -> MalformedPathError:
    diagnostic = Diagnostic(code=code, message=message, location=" -> ".join(path))
    return MalformedPathError(diagnostic, path=path)


def leaf_paths(authoring_map: Mapping[str, object], *, strict: bool = False) -> Iterator[LeafPath]:
    """Yield every leaf of an authoring map in insertion order.

    Args:
        authoring_map: Nested mapping with string leaves
        strict: Reject unknown decorator suffixes

    Yields:
        LeafPath for each string leaf

    Raises:
        MalformedPathError: If a path is shorter than locale + leaf name + text,
            a leaf is not a string, or a segment is empty
    """
    # Iterative depth-first walk; authoring maps can nest arbitrarily deep.
    stack: list[tuple[tuple[str, ...], Iterator[tuple[object, object]]]] = [
        ((), iter(authoring_map.items()))
    ]
    while stack:
        prefix, items = stack[-1]
        entry = next(items, None)
        if entry is None:
            stack.pop()
            continue

        raw_segment, value = entry
        segment = str(raw_segment)
        path = (*prefix, segment)
        if not segment.strip():
            raise _malformed(DiagnosticCode.EMPTY_SEGMENT, "Empty segment in authoring path", path)

        if isinstance(value, Mapping):
            stack.append((path, iter(value.items())))
            continue

        if not isinstance(value, str):
            raise _malformed(
                DiagnosticCode.LEAF_NOT_TEXT,
                f"Leaf value must be text, got {type(value).__name__}",
                path,
            )

        if len(path) + 1 < _MIN_PATH_LENGTH:
            raise _malformed(
                DiagnosticCode.PATH_TOO_SHORT,
                f"Authoring path too short: {segment!r} -> {value!r}",
                path,
            )

        try:
            name, decorator = split_decorator(path[-1], strict=strict)
        except MalformedPathError as e:
            raise _malformed(DiagnosticCode.UNKNOWN_DECORATOR, str(e.diagnostic), path) from e
        yield LeafPath(
            locale=normalize_locale(path[0]),
            namespaces=path[1:-1],
            name=name,
            decorator=decorator,
            text=value,
        )
