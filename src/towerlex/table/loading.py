"""Authoring map loading infrastructure.

Provides the protocol for authoring-map loaders and a filesystem
implementation reading one JSON or TOML file per locale, with
path-traversal protection.

Components:
    AuthoringLoader - Protocol for loading one locale's authoring subtree
    PathAuthoringLoader - Disk-based loader using a {locale} path template
    load_authoring_map - Assemble {locale: subtree} from a loader

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from towerlex.diagnostics import Diagnostic, DiagnosticCode, MalformedPathError
from towerlex.locale_utils import normalize_locale
from towerlex.table.types import LocaleCode

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "AuthoringLoader",
    # Concrete loader
    "PathAuthoringLoader",
    # Assembly
    "load_authoring_map",
]

logger = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES = (".json", ".toml")


class AuthoringLoader(Protocol):
    """Protocol for loading the authoring subtree of a single locale.

    This is a Protocol (structural typing) rather than ABC so any object
    with a matching load() method can serve, including test doubles.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, data):
        ...         self.data = data
        ...     def load(self, locale):
        ...         return self.data[locale]
    """

    def load(self, locale: LocaleCode) -> Mapping[str, object]:
        """Load the authoring subtree for a locale.

        Args:
            locale: Locale code (e.g., 'en', 'en_US')

        Returns:
            Nested mapping namespace... -> leaf name -> text

        Raises:
            FileNotFoundError: If no authoring source exists for this locale
        """
        ...


@dataclass(frozen=True, slots=True)
class PathAuthoringLoader:
    """File system loader using a path template.

    The template must contain a ``{locale}`` placeholder and end in
    ``.json`` or ``.toml``; the suffix selects the decoder. Files are read
    as UTF-8.

    Security:
        Locale codes containing path separators or ".." are rejected, and
        every resolved path is validated against a fixed root directory.

    Example:
        >>> loader = PathAuthoringLoader("locales/{locale}.toml")
        >>> subtree = loader.load("en_US")
        # Loads from: locales/en_US.toml

    Attributes:
        path_template: Path with {locale} placeholder
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of path_template.
    """

    path_template: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the template and cache the resolved root directory.

        Raises:
            ValueError: If the template lacks {locale} or has an unsupported suffix
        """
        if "{locale}" not in self.path_template:
            msg = (
                f"path_template must contain '{{locale}}' placeholder, "
                f"got: '{self.path_template}'"
            )
            raise ValueError(msg)
        if not self.path_template.endswith(_SUPPORTED_SUFFIXES):
            msg = (
                f"path_template must end in one of {_SUPPORTED_SUFFIXES}, "
                f"got: '{self.path_template}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.path_template.split("{locale}")[0]
            static_dir = static_prefix.rstrip("/\\")
            if static_prefix and not static_prefix.endswith(("/", "\\")):
                # "locales/messages-{locale}.json": root is the directory part
                static_dir = str(Path(static_prefix).parent)
            resolved = Path(static_dir).resolve() if static_dir else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleCode) -> str:
        """Return the file path for a locale, for diagnostics."""
        return self.path_template.replace("{locale}", locale)

    def load(self, locale: LocaleCode) -> Mapping[str, object]:
        """Load and decode the authoring file for a locale.

        Args:
            locale: Locale code to substitute in the path template

        Returns:
            Decoded authoring subtree

        Raises:
            ValueError: If the locale is unsafe, the path escapes the root
                directory, or the file is not valid JSON/TOML
            MalformedPathError: If the file does not decode to a mapping
            FileNotFoundError: If the file doesn't exist
        """
        self._validate_locale(locale)

        full_path = Path(self.describe_path(locale)).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}'"
            )
            raise ValueError(msg) from None

        source = full_path.read_text(encoding="utf-8")
        if full_path.suffix == ".toml":
            data: object = tomllib.loads(source)
        else:
            data = json.loads(source)

        if not isinstance(data, Mapping):
            diagnostic = Diagnostic(
                code=DiagnosticCode.LEAF_NOT_TEXT,
                message=f"Authoring file must contain a mapping, got {type(data).__name__}",
                location=str(full_path),
            )
            raise MalformedPathError(diagnostic, path=(locale,))
        return data


def load_authoring_map(
    loader: AuthoringLoader,
    locales: Iterable[LocaleCode],
    *,
    skip_missing: bool = True,
) -> dict[LocaleCode, Mapping[str, object]]:
    """Assemble a full authoring map from per-locale sources.

    Args:
        loader: Source of per-locale authoring subtrees
        locales: Locales to load, in authoring order
        skip_missing: Log and skip locales whose source does not exist
            (default). When False, FileNotFoundError propagates.

    Returns:
        Authoring map {locale: subtree}, ready for compile_translation_table()

    Raises:
        FileNotFoundError: If a source is missing and skip_missing is False
    """
    authoring_map: dict[LocaleCode, Mapping[str, object]] = {}
    for locale in dict.fromkeys(normalize_locale(code) for code in locales):
        try:
            authoring_map[locale] = loader.load(locale)
        except FileNotFoundError:
            if not skip_missing:
                raise
            logger.warning("No authoring source for locale '%s'; skipping", locale)
    return authoring_map
