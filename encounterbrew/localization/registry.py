"""
Localizer Registry - Process-wide shared localizer.

The localizer is built once, on first request:
- Concurrent first callers wait on a lock and receive the same instance
- The document file is read exactly once
- Later requests return the existing instance and ignore their path
- A failed load raises to the caller and leaves the cell empty

reset_localizer() clears the cell; it exists for tests.
"""

from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import Callable

from .localizer import Localizer

logger = logging.getLogger(__name__)


class LocalizerCell:
    """
    Exactly-once holder for a Localizer.

    Args:
        loader: Builds the localizer from a path (Localizer.from_file)
    """

    def __init__(self, loader: Callable[[str | Path], Localizer] | None = None):
        self._loader = loader or Localizer.from_file
        self._lock = threading.Lock()
        self._instance: Localizer | None = None

    @property
    def initialized(self) -> bool:
        return self._instance is not None

    def get(self, path: str | Path) -> Localizer:
        instance = self._instance
        if instance is not None:
            return instance

        with self._lock:
            if self._instance is None:
                self._instance = self._loader(path)
            elif str(path) != self._instance.source:
                logger.debug(
                    "Localizer already loaded from %s; ignoring %s",
                    self._instance.source,
                    path,
                )
            return self._instance

    def reset(self):
        with self._lock:
            self._instance = None


_cell = LocalizerCell()


def get_localizer(path: str | Path) -> Localizer:
    """
    Get the shared localizer, loading it from path on first use.

    Raises:
        FileNotReadableError, MalformedDocumentError (first load only)
    """
    return _cell.get(path)


def reset_localizer():
    """Forget the shared localizer. Test hook."""
    _cell.reset()
