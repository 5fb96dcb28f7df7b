"""
Localization Document - Loading and validation of the nested key/value file.

The document is a JSON object whose values are either strings (leaves) or
further objects. It is validated once with a recursive Pydantic model and
then frozen into read-only mappings, so lookups never need a lock.

Errors:
- FileNotReadableError: the file could not be opened or read
- MalformedDocumentError: the content is not a nested object of strings
"""

from __future__ import annotations
import json
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import RootModel, ValidationError


class LocalizationError(Exception):
    """Base class for localization document failures."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class FileNotReadableError(LocalizationError):
    """Raised when the document file cannot be read."""


class MalformedDocumentError(LocalizationError):
    """Raised when the document is not a nested key/value structure."""


class LocalizationNode(RootModel):
    """A keyed node: every value is a string leaf or another node."""
    root: Dict[str, Union[str, LocalizationNode]]


LocalizationNode.model_rebuild()


def freeze(node: Any) -> Any:
    """Recursively wrap nested dicts in read-only mapping proxies."""
    if isinstance(node, Mapping):
        return MappingProxyType({key: freeze(value) for key, value in node.items()})
    return node


def parse_document(content: str | bytes, source: str = "<memory>") -> Mapping[str, Any]:
    """
    Parse and validate document content.

    Returns the frozen document tree.

    Raises:
        MalformedDocumentError: invalid JSON or wrong structure
    """
    try:
        raw = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(source, f"invalid JSON ({e})") from e

    try:
        node = LocalizationNode.model_validate(raw)
    except ValidationError as e:
        raise MalformedDocumentError(
            source, f"expected nested objects of strings ({e.error_count()} error(s))"
        ) from e

    return freeze(node.model_dump())


def load_document(path: str | Path) -> Mapping[str, Any]:
    """
    Read and validate a document file.

    Raises:
        FileNotReadableError: the file could not be read
        MalformedDocumentError: the content is invalid
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise FileNotReadableError(str(path), e.strerror or str(e)) from e

    return parse_document(content, source=str(path))
