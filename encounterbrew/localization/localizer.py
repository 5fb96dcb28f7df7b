"""
Localizer - Resolves @Localize[dot.path] placeholders.

Resolution walks the document one dot-separated key at a time; the final
key must name a string leaf. A placeholder that does not resolve is left in
the text exactly as written, and the other placeholders in the same text
are still attempted.

Resolved values are cleaned:
- Escaped "\\n" sequences become real newlines
- Leading/trailing whitespace is trimmed
- Runs of three or more newlines collapse to two
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any

from .document import freeze, load_document

logger = logging.getLogger(__name__)

LOCALIZE_PATTERN = re.compile(r"@Localize\[([^\]]+)\]")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def clean_text(text: str) -> str:
    """Normalize a resolved leaf value for display."""
    text = text.replace("\\n", "\n")
    text = text.strip()
    return _EXCESS_NEWLINES.sub("\n\n", text)


def stringify(value: Any) -> str:
    """
    Render a scalar as text.

    None becomes "", booleans use their lower-case literal form.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Localizer:
    """
    Placeholder resolver over an immutable localization document.

    Usage:
        localizer = Localizer.from_file("lang/en.json")
        localizer.resolve("@Localize[COMBAT.Begin]")  # -> "Begin Encounter"

    Most callers go through get_localizer(), which shares one instance
    across the process.
    """

    pattern = LOCALIZE_PATTERN

    def __init__(self, document: Mapping[str, Any], source: str | None = None):
        if not isinstance(document, MappingProxyType):
            document = freeze(document)
        self._document = document
        self.source = source

    @classmethod
    def from_file(cls, path: str | Path) -> Localizer:
        """
        Load a localizer from a JSON document.

        Raises:
            FileNotReadableError, MalformedDocumentError
        """
        document = load_document(path)
        logger.info("Loaded localization document %s (%d top-level keys)", path, len(document))
        return cls(document, source=str(path))

    @property
    def document(self) -> Mapping[str, Any]:
        return self._document

    def lookup(self, path: str) -> str | None:
        """
        Get the cleaned leaf value at a dot-separated path.

        Returns None when any segment is missing, an intermediate node is a
        leaf, or the final node is not a string.
        """
        *parents, last = path.split(".")
        current: Any = self._document

        for part in parents:
            current = current.get(part)
            if not isinstance(current, Mapping):
                return None

        value = current.get(last)
        if not isinstance(value, str):
            return None
        return clean_text(value)

    def resolve(self, value: Any) -> str:
        """
        Replace every @Localize[...] placeholder in value.

        Non-string scalars are stringified first; None yields "".
        """
        if not isinstance(value, str):
            return stringify(value)
        return self.pattern.sub(self._replace, value)

    def _replace(self, match: re.Match[str]) -> str:
        path = match.group(1)
        text = self.lookup(path)
        if text is None:
            logger.debug("Unresolved localization key %s", path)
            return match.group(0)
        return text
