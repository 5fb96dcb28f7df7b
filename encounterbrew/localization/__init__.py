"""
Localization - Resolution of @Localize[...] placeholders.

The localization layer:
1. Loads a nested JSON document once per process
2. Validates it (objects of objects, string leaves)
3. Resolves dot-separated keys to cleaned leaf text
4. Leaves unresolvable placeholders untouched
"""

from .document import (
    LocalizationError,
    FileNotReadableError,
    MalformedDocumentError,
    LocalizationNode,
    load_document,
    parse_document,
)
from .localizer import Localizer, clean_text, stringify, LOCALIZE_PATTERN
from .registry import LocalizerCell, get_localizer, reset_localizer

__all__ = [
    "LocalizationError",
    "FileNotReadableError",
    "MalformedDocumentError",
    "LocalizationNode",
    "load_document",
    "parse_document",
    "Localizer",
    "clean_text",
    "stringify",
    "LOCALIZE_PATTERN",
    "LocalizerCell",
    "get_localizer",
    "reset_localizer",
]
