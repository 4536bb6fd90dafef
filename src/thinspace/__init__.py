"""Whitespace normalization and CJK/Latin thin spacing for HTML."""

from __future__ import annotations

from .constants import THIN_SPACE_CSS
from .pipeline import default_marker, parse, typeset, typeset_html, typeset_transforms
from .transforms import (
    DropComments,
    EditDocument,
    InsertBetweenWideAndNarrow,
    NormalizeNewlines,
    RemoveInterElementWhitespace,
    apply_compiled_transforms,
    apply_transforms,
    compile_transforms,
    insert_between_wide_and_narrow,
    process_newlines,
    remove_comments,
    remove_inter_element_whitespace,
)

__version__ = "0.1.0"

__all__ = [
    "THIN_SPACE_CSS",
    "DropComments",
    "EditDocument",
    "InsertBetweenWideAndNarrow",
    "NormalizeNewlines",
    "RemoveInterElementWhitespace",
    "__version__",
    "apply_compiled_transforms",
    "apply_transforms",
    "compile_transforms",
    "default_marker",
    "insert_between_wide_and_narrow",
    "parse",
    "process_newlines",
    "remove_comments",
    "remove_inter_element_whitespace",
    "typeset",
    "typeset_html",
    "typeset_transforms",
]
