"""Pytest configuration for the towerlex test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from towerlex.formatting import LocaleContext
from towerlex.locale_utils import clear_locale_cache
from towerlex.table import TranslationTable, compile_translation_table

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================

BUTTONS_AUTHORING_MAP = {
    "en": {
        "root": {
            "buttons": {
                "login.html": "<b>Sign in</b>",
                "login.note": "Title of login button (bold)",
                "logout.md": "**Sign out**",
                "message": "Hello & welcome.",
            }
        }
    },
    "en_US": {"root": {"buttons": {"logout": "American sign out"}}},
}


@pytest.fixture(autouse=True)
def _isolated_caches() -> Iterator[None]:
    """Start every test with empty locale caches."""
    clear_locale_cache()
    LocaleContext.clear_cache()
    yield
    clear_locale_cache()
    LocaleContext.clear_cache()


@pytest.fixture
def buttons_table() -> TranslationTable:
    """Table compiled from the canonical buttons example (canonical locale: en)."""
    return compile_translation_table("en", BUTTONS_AUTHORING_MAP)


@pytest.fixture
def layered_table() -> TranslationTable:
    """Table with the same key at several locale levels."""
    return TranslationTable(
        "en",
        {
            "en": {"a/b/c": "English text", "e/f": "Different English text"},
            "en_US": {"a/b/c": "English (US) text"},
            "en_UK": {"a/b/c": "English (UK) text"},
            "en_UK_va1": {"a/b/c": "English (UK, var1) text"},
            "de": {"only/de": "Nur Deutsch"},
        },
    )
