"""Abstract notebook repository contract and the notebook source choice."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from nbstore.notebook.models import Notebook


@dataclass(frozen=True, slots=True)
class RemoteUri:
    """Create the notebook from the body of a URL."""

    uri: str


@dataclass(frozen=True, slots=True)
class LiteralContent:
    """Create the notebook from caller-supplied text.

    Text destined for a ``.json`` path is treated as a legacy Zeppelin note and
    converted; anything else is written verbatim.
    """

    content: str


@dataclass(frozen=True, slots=True)
class BlankNotebook:
    """Create a fresh notebook with a single introductory text cell."""


BLANK = BlankNotebook()

NotebookSource = RemoteUri | LiteralContent | BlankNotebook


class NotebookRepository(ABC):
    """Operations a server or CLI layer uses to manage notebooks."""

    @abstractmethod
    async def notebook_exists(self, path: str) -> bool:
        ...

    @abstractmethod
    async def load_notebook(self, path: str) -> Notebook:
        ...

    @abstractmethod
    async def save_notebook(self, path: str, notebook: Notebook) -> None:
        ...

    @abstractmethod
    async def list_notebooks(self) -> list[str]:
        ...

    @abstractmethod
    async def create_notebook(self, path: str, source: NotebookSource = BLANK) -> str:
        """Create a notebook at ``path`` and return its normalised relative path."""


__all__ = [
    "BLANK",
    "BlankNotebook",
    "LiteralContent",
    "NotebookRepository",
    "NotebookSource",
    "RemoteUri",
]
