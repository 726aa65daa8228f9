"""Tests for key resolution with locale fallback.

Python 3.13+.
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from towerlex.diagnostics import FormatError
from towerlex.runtime import MissInfo, resolve, resolve_formatted
from towerlex.table import TranslationTable, compile_translation_table


class TestFallbackChain:
    """Most specific locale wins; coarser locales fill the gaps."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("en", "English text"),
            ("en_US", "English (US) text"),
            ("en_UK", "English (UK) text"),
            ("en_UK_va1", "English (UK, var1) text"),
            ("en_US_va1", "English (US) text"),
            ("en_AU", "English text"),
        ],
    )
    def test_most_specific_wins(
        self, layered_table: TranslationTable, locale: str, expected: str
    ) -> None:
        assert resolve("a/b/c", None, locale, layered_table) == expected

    def test_coarse_fallback(self, layered_table: TranslationTable) -> None:
        assert resolve("e/f", None, "en_UK_va1", layered_table) == "Different English text"


class TestScope:
    """Scope is prefixed to the key before lookup."""

    def test_string_scope(self, buttons_table: TranslationTable) -> None:
        assert resolve("buttons/login", "root", "en", buttons_table) == "<b>Sign in</b>"

    def test_sequence_key_and_scope(self, buttons_table: TranslationTable) -> None:
        assert resolve(("login",), ("root", "buttons"), "en", buttons_table) == "<b>Sign in</b>"

    def test_no_scope_means_fully_qualified(self, buttons_table: TranslationTable) -> None:
        assert resolve("root/buttons/login", None, "en", buttons_table) == "<b>Sign in</b>"

    def test_buttons_us_override(self, buttons_table: TranslationTable) -> None:
        assert resolve("buttons/logout", "root", "en_US", buttons_table) == "American sign out"
        assert resolve("buttons/login", "root", "en_US", buttons_table) == "<b>Sign in</b>"


class TestDevMode:
    """Dev mode marks misses visibly."""

    def test_placeholder(self, layered_table: TranslationTable) -> None:
        assert resolve("x/y", None, "en_US", layered_table, dev_mode=True) == "**x/y**"

    def test_placeholder_uses_qualified_key(self, buttons_table: TranslationTable) -> None:
        result = resolve("buttons/help", "root", "en", buttons_table, dev_mode=True)
        assert result == "**root/buttons/help**"

    def test_canonical_not_consulted(self, layered_table: TranslationTable) -> None:
        """Keys outside the chain are placeholders even if the canonical locale has them."""
        assert resolve("a/b/c", None, "de", layered_table, dev_mode=True) == "**a/b/c**"

    def test_no_miss_report(self, layered_table: TranslationTable) -> None:
        calls: list[MissInfo] = []
        resolve("x/y", None, "en", layered_table, dev_mode=True, on_miss=calls.append)
        assert calls == []


class TestProductionMode:
    """Production falls back to canonical text, then to empty text."""

    def test_canonical_fallback(self, layered_table: TranslationTable) -> None:
        assert resolve("a/b/c", None, "de", layered_table) == "English text"

    def test_empty_when_canonical_missing(self, layered_table: TranslationTable) -> None:
        assert resolve("x/y", None, "de", layered_table) == ""

    def test_exactly_one_report(
        self, layered_table: TranslationTable, caplog: pytest.LogCaptureFixture
    ) -> None:
        calls: list[MissInfo] = []

        with caplog.at_level(logging.WARNING, logger="towerlex.runtime.resolver"):
            resolve("a/b/c", None, "de_AT", layered_table, on_miss=calls.append)

        assert calls == [
            MissInfo(
                key="a/b/c",
                locale="de_AT",
                chain=("de_AT", "de"),
                canonical_locale="en",
                used_canonical=True,
            )
        ]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "a/b/c" in warnings[0].getMessage()

    def test_hit_is_not_reported(self, layered_table: TranslationTable) -> None:
        calls: list[MissInfo] = []
        resolve("a/b/c", None, "en_US", layered_table, on_miss=calls.append)
        assert calls == []

    def test_absent_everywhere_reported_once(
        self, layered_table: TranslationTable, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A key missing from the canonical locale too is still reported once."""
        calls: list[MissInfo] = []

        with caplog.at_level(logging.WARNING, logger="towerlex.runtime.resolver"):
            result = resolve("x/y", None, "de", layered_table, on_miss=calls.append)

        assert result == ""
        assert len(calls) == 1
        assert calls[0].used_canonical is False
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "x/y" in warnings[0].getMessage()

    def test_callback_failure_logged(
        self, layered_table: TranslationTable, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A failing miss handler never breaks the lookup."""

        def broken(_info: MissInfo) -> None:
            msg = "metrics backend down"
            raise RuntimeError(msg)

        with caplog.at_level(logging.ERROR, logger="towerlex.runtime.resolver"):
            result = resolve("a/b/c", None, "de", layered_table, on_miss=broken)

        assert result == "English text"
        assert "on_miss callback failed" in caplog.text


class TestResolveFormatted:
    """Resolve, then substitute pattern arguments."""

    @pytest.fixture
    def message_table(self) -> TranslationTable:
        return compile_translation_table(
            "en",
            {
                "en": {"msg": {"greet": "Hello, {0}!", "count": "{0,number,integer} items"}},
                "de": {"msg": {"count": "{0,number,integer} Artikel"}},
            },
        )

    def test_substitution(self, message_table: TranslationTable) -> None:
        assert resolve_formatted("greet", ["Anna"], "msg", "en", message_table) == "Hello, Anna!"

    def test_locale_formats_numbers(self, message_table: TranslationTable) -> None:
        result = resolve_formatted("count", [1234.4], "msg", "de", message_table)
        assert result == "1.234 Artikel"

    def test_fallback_then_format(self, message_table: TranslationTable) -> None:
        """Canonical text formats with the working locale's conventions."""
        result = resolve_formatted("greet", ["Jan"], "msg", "de", message_table)
        assert result == "Hello, Jan!"

    def test_dev_placeholder_formats_cleanly(self, message_table: TranslationTable) -> None:
        result = resolve_formatted("nope", [1], "msg", "en", message_table, dev_mode=True)
        assert result == "**msg/nope**"

    def test_bad_pattern_propagates(self) -> None:
        table = TranslationTable("en", {"en": {"broken": "Hello {0"}})
        with pytest.raises(FormatError):
            resolve_formatted("broken", ["x"], None, "en", table)


class TestProperties:
    """Resolution properties over generated keys."""

    @given(
        key=st.text(
            alphabet=st.characters(categories=("Ll", "Nd")), min_size=1, max_size=12
        ),
        text=st.text(max_size=30),
    )
    def test_compile_then_resolve_round_trip(self, key: str, text: str) -> None:
        """A raw (html) leaf resolves to exactly its authored text."""
        table = compile_translation_table("en", {"en": {"ns": {f"{key}.html": text}}})
        assert resolve(key, "ns", "en_US_x", table) == text

    @given(key=st.text(alphabet="abcxyz/", min_size=1, max_size=12))
    def test_miss_never_raises(self, key: str) -> None:
        table = TranslationTable("en", {})
        assert resolve(key, None, "fr_FR", table) == ""
        assert resolve(key, None, "fr_FR", table, dev_mode=True) == f"**{key}**"
