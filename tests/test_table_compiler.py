"""Tests for the translation table compiler.

Python 3.13+.
"""

import html
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from towerlex.diagnostics import MalformedPathError
from towerlex.table import TableCompiler, TranslationTable, compile_translation_table


class TestButtonsScenario:
    """The canonical authoring example compiles as documented."""

    def test_html_passthrough(self, buttons_table: TranslationTable) -> None:
        assert buttons_table.get("en", "root/buttons/login") == "<b>Sign in</b>"

    def test_markdown_expanded(self, buttons_table: TranslationTable) -> None:
        assert buttons_table.get("en", "root/buttons/logout") == "<strong>Sign out</strong>"

    def test_default_escaped(self, buttons_table: TranslationTable) -> None:
        assert buttons_table.get("en", "root/buttons/message") == "Hello &amp; welcome."

    def test_note_discarded(self, buttons_table: TranslationTable) -> None:
        """The login note does not override or add to the login entry."""
        assert buttons_table.keys("en") == {
            "root/buttons/login",
            "root/buttons/logout",
            "root/buttons/message",
        }

    def test_second_locale(self, buttons_table: TranslationTable) -> None:
        assert buttons_table.to_dict()["en_US"] == {"root/buttons/logout": "American sign out"}

    def test_canonical_locale_recorded(self, buttons_table: TranslationTable) -> None:
        assert buttons_table.canonical_locale == "en"


class TestDecoratorRules:
    """Each decorator applies its text rule."""

    def test_markdown_escapes_before_expanding(self) -> None:
        """Markdown text cannot smuggle in raw markup."""
        table = compile_translation_table("en", {"en": {"m.md": "**<script>**"}})
        assert table.get("en", "m") == "<strong>&lt;script&gt;</strong>"

    def test_unknown_decorator_escaped(self) -> None:
        table = compile_translation_table("en", {"en": {"m.txt": "a < b"}})
        assert table.get("en", "m") == "a &lt; b"

    def test_unknown_decorator_strict(self) -> None:
        with pytest.raises(MalformedPathError):
            compile_translation_table("en", {"en": {"m.txt": "a < b"}}, strict=True)

    def test_underscore_decorator(self) -> None:
        table = compile_translation_table("en", {"en": {"title_html": "<i>T</i>"}})
        assert table.get("en", "title") == "<i>T</i>"


class TestMergeRule:
    """Colliding keys resolve by last write in authoring order."""

    def test_later_definition_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        authoring = {"en": {"btn": {"login.html": "<b>first</b>", "login": "second & last"}}}

        with caplog.at_level(logging.WARNING, logger="towerlex.table.compiler"):
            table = compile_translation_table("en", authoring)

        assert table.get("en", "btn/login") == "second &amp; last"
        assert "defined more than once" in caplog.text

    def test_order_reversed(self) -> None:
        authoring = {"en": {"btn": {"login": "plain", "login.html": "<b>last</b>"}}}
        table = compile_translation_table("en", authoring)
        assert table.get("en", "btn/login") == "<b>last</b>"

    def test_locales_merge_independently(self) -> None:
        """Same key under different locales never collides."""
        table = compile_translation_table("en", {"en": {"k": "E"}, "de": {"k": "D"}})
        assert table.get("en", "k") == "E"
        assert table.get("de", "k") == "D"

    def test_normalized_locales_merge(self) -> None:
        """'en-US' and 'en_US' feed the same locale mapping."""
        table = compile_translation_table("en", {"en-US": {"a": "A"}, "en_US": {"b": "B"}})
        assert table.keys("en_US") == {"a", "b"}


class TestFailFast:
    """Structural problems abort compilation."""

    def test_short_path_raises(self) -> None:
        with pytest.raises(MalformedPathError):
            compile_translation_table("en", {"en": {"ok": "fine"}, "de": "too short"})

    def test_input_not_mutated(self) -> None:
        authoring = {"en": {"a.md": "*x*"}}
        compile_translation_table("en", authoring)
        assert authoring == {"en": {"a.md": "*x*"}}


class TestTableCompiler:
    """Test TableCompiler class API."""

    def test_strict_property(self) -> None:
        assert TableCompiler(strict=True).strict is True
        assert TableCompiler().strict is False

    def test_canonical_locale_normalized(self) -> None:
        table = TableCompiler().compile("en-GB", {"en_GB": {"a": "A"}})
        assert table.canonical_locale == "en_GB"

    def test_canonical_locale_without_entries(self) -> None:
        """The canonical locale is recorded even when it has no entries."""
        table = TableCompiler().compile("fr", {"en": {"a": "A"}})
        assert table.canonical_locale == "fr"
        assert "fr" not in table


leaf_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=10)


class TestDecoratorProperties:
    """Decorator rules hold for arbitrary text."""

    @given(name=leaf_names, text=st.text())
    def test_note_contributes_nothing(self, name: str, text: str) -> None:
        table = compile_translation_table("en", {"en": {"ns": {f"{name}.note": text}}})
        assert table.entry_count == 0

    @given(name=leaf_names, text=st.text())
    def test_html_is_identity(self, name: str, text: str) -> None:
        table = compile_translation_table("en", {"en": {"ns": {f"{name}_html": text}}})
        assert table.get("en", f"ns/{name}") == text

    @given(name=leaf_names, suffix=st.sampled_from(["", ".txt", ".label"]), text=st.text())
    def test_undecorated_is_escaped(self, name: str, suffix: str, text: str) -> None:
        table = compile_translation_table("en", {"en": {"ns": {f"{name}{suffix}": text}}})
        assert table.get("en", f"ns/{name}") == html.escape(text, quote=True)
