"""Tests for leaf-path extraction and decorator parsing.

Python 3.13+.
"""

import pytest

from towerlex.diagnostics import DiagnosticCode, MalformedPathError
from towerlex.enums import Decorator
from towerlex.table.paths import LeafPath, leaf_paths, split_decorator


class TestSplitDecorator:
    """Test split_decorator function."""

    @pytest.mark.parametrize(
        ("leaf_name", "expected"),
        [
            ("login.html", ("login", Decorator.HTML)),
            ("logout.md", ("logout", Decorator.MARKDOWN)),
            ("login.note", ("login", Decorator.NOTE)),
            ("login_html", ("login", Decorator.HTML)),
            ("logout_md", ("logout", Decorator.MARKDOWN)),
            ("login_note", ("login", Decorator.NOTE)),
            ("message", ("message", Decorator.DEFAULT)),
        ],
    )
    def test_known_suffixes(self, leaf_name: str, expected: tuple[str, Decorator]) -> None:
        """Both separators select the named decorator."""
        assert split_decorator(leaf_name) == expected

    def test_underscore_name_kept(self) -> None:
        """An underscore not followed by a decorator token is part of the name."""
        assert split_decorator("first_name") == ("first_name", Decorator.DEFAULT)

    def test_unknown_dot_suffix_is_default(self) -> None:
        """Unknown '.' suffix is stripped and treated as undecorated."""
        assert split_decorator("title.txt") == ("title", Decorator.DEFAULT)

    def test_unknown_dot_suffix_strict(self) -> None:
        """Strict mode rejects unknown '.' suffixes."""
        with pytest.raises(MalformedPathError, match="Unknown decorator 'txt'"):
            split_decorator("title.txt", strict=True)

    def test_leading_dot_is_not_a_decorator(self) -> None:
        """A name starting with the separator has no base to split from."""
        assert split_decorator(".html") == (".html", Decorator.DEFAULT)

    def test_last_separator_wins(self) -> None:
        """Only the final suffix is the decorator."""
        assert split_decorator("nav.item.md") == ("nav.item", Decorator.MARKDOWN)


class TestLeafPaths:
    """Test leaf_paths walker."""

    def test_nested_leaf(self) -> None:
        """Leaf path splits into locale, namespaces, name and decorator."""
        leaves = list(leaf_paths({"en": {"root": {"buttons": {"login.html": "<b>x</b>"}}}}))

        assert leaves == [
            LeafPath(
                locale="en",
                namespaces=("root", "buttons"),
                name="login",
                decorator=Decorator.HTML,
                text="<b>x</b>",
            )
        ]
        assert leaves[0].key == "root/buttons/login"

    def test_minimum_path(self) -> None:
        """Locale + leaf name + text is the shortest valid path."""
        (leaf,) = leaf_paths({"en": {"hello": "Hello"}})
        assert leaf.namespaces == ()
        assert leaf.key == "hello"

    def test_insertion_order(self) -> None:
        """Leaves are yielded depth-first in authoring order."""
        authoring = {"en": {"b": {"x": "1"}, "a": "2"}, "de": {"c": "3"}}
        keys = [(leaf.locale, leaf.key) for leaf in leaf_paths(authoring)]
        assert keys == [("en", "b/x"), ("en", "a"), ("de", "c")]

    def test_locale_normalized(self) -> None:
        """BCP-47 locale segments are normalized."""
        (leaf,) = leaf_paths({"en-US": {"hello": "Hi"}})
        assert leaf.locale == "en_US"

    def test_path_too_short(self) -> None:
        """Text directly under a locale has no leaf name."""
        with pytest.raises(MalformedPathError) as exc_info:
            list(leaf_paths({"en": "Hello"}))

        assert exc_info.value.path == ("en",)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PATH_TOO_SHORT

    def test_non_text_leaf(self) -> None:
        """Leaves must be strings."""
        with pytest.raises(MalformedPathError, match="must be text"):
            list(leaf_paths({"en": {"count": 3}}))

    def test_empty_segment(self) -> None:
        """Blank segments would produce ambiguous keys."""
        with pytest.raises(MalformedPathError, match="Empty segment"):
            list(leaf_paths({"en": {"": {"x": "y"}}}))

    def test_strict_error_carries_full_path(self) -> None:
        """Strict decorator errors report where the leaf lives."""
        with pytest.raises(MalformedPathError) as exc_info:
            list(leaf_paths({"en": {"root": {"title.txt": "T"}}}, strict=True))

        assert exc_info.value.path == ("en", "root", "title.txt")

    def test_empty_subtree_yields_nothing(self) -> None:
        assert list(leaf_paths({"en": {"root": {}}})) == []
