"""Error taxonomy for notebook store operations.

Every failure kind has its own class so callers (an HTTP layer, the CLI) can
map them to protocol-specific responses. Each class also derives from the
closest builtin exception.
"""

from __future__ import annotations


class NotebookStoreError(Exception):
    """Base class for all notebook store failures."""


class InvalidNotebookPathError(NotebookStoreError, ValueError):
    """The requested path is too deep or escapes the repository root."""


class NotebookExistsError(NotebookStoreError, FileExistsError):
    """A notebook already exists at the target path."""


class NotebookNotFoundError(NotebookStoreError, FileNotFoundError):
    """The notebook to load does not exist."""


class FetchError(NotebookStoreError, RuntimeError):
    """Downloading remote notebook content failed."""


class NotebookConversionError(NotebookStoreError, ValueError):
    """Notebook content could not be parsed or converted."""


class NotebookIOError(NotebookStoreError, OSError):
    """Any other filesystem failure while reading, writing or listing."""


__all__ = [
    "FetchError",
    "InvalidNotebookPathError",
    "NotebookConversionError",
    "NotebookExistsError",
    "NotebookIOError",
    "NotebookNotFoundError",
    "NotebookStoreError",
]
