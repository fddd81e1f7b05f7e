"""Notebook document model and canonical codec."""

from __future__ import annotations

from .ipynb import JupyterNotebook, deserialize, serialize
from .models import TEXT_LANGUAGE, Notebook, NotebookCell, NotebookConfig

__all__ = [
    "JupyterNotebook",
    "Notebook",
    "NotebookCell",
    "NotebookConfig",
    "TEXT_LANGUAGE",
    "deserialize",
    "serialize",
]
