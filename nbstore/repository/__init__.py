"""Notebook repositories."""

from __future__ import annotations

from .base import (
    BLANK,
    BlankNotebook,
    LiteralContent,
    NotebookRepository,
    NotebookSource,
    RemoteUri,
)
from .file import FileNotebookRepository

__all__ = [
    "BLANK",
    "BlankNotebook",
    "FileNotebookRepository",
    "LiteralContent",
    "NotebookRepository",
    "NotebookSource",
    "RemoteUri",
]
