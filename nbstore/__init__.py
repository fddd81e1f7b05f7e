"""Directory-backed notebook store.

The main entry point is :class:`~nbstore.repository.FileNotebookRepository`,
which lists, loads, saves and creates notebooks below a single root
directory.
"""

from .repository import (
    BLANK,
    BlankNotebook,
    FileNotebookRepository,
    LiteralContent,
    NotebookRepository,
    NotebookSource,
    RemoteUri,
)

__all__ = [
    "BLANK",
    "BlankNotebook",
    "FileNotebookRepository",
    "LiteralContent",
    "NotebookRepository",
    "NotebookSource",
    "RemoteUri",
]
