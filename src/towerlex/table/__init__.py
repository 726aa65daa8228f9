"""Translation table package: authoring-map compilation and loading.

Submodules:
    types    - TranslationTable and PEP 695 type aliases
    paths    - LeafPath extraction and decorator parsing
    compiler - TableCompiler, compile_translation_table
    loading  - AuthoringLoader protocol, PathAuthoringLoader, load_authoring_map

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from towerlex.table.compiler import TableCompiler, compile_leaf, compile_translation_table
from towerlex.table.loading import AuthoringLoader, PathAuthoringLoader, load_authoring_map
from towerlex.table.paths import LeafPath, leaf_paths, split_decorator
from towerlex.table.types import AuthoringMap, LocaleCode, TranslationKey, TranslationTable

__all__ = [
    # Compilation
    "TableCompiler",
    "compile_translation_table",
    "compile_leaf",
    # Leaf extraction
    "LeafPath",
    "leaf_paths",
    "split_decorator",
    # Loading
    "AuthoringLoader",
    "PathAuthoringLoader",
    "load_authoring_map",
    # Types
    "TranslationTable",
    "AuthoringMap",
    "LocaleCode",
    "TranslationKey",
]
