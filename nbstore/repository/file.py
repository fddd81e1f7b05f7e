"""Notebook repository backed by a directory tree."""

from __future__ import annotations

import asyncio
import functools
import os
import re
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, TypeVar

from loguru import logger

from nbstore.config.app import AppConfig
from nbstore.config.notebook import NotebookDefaultsConfig
from nbstore.config.store import StoreConfig
from nbstore.errors import (
    InvalidNotebookPathError,
    NotebookExistsError,
    NotebookIOError,
    NotebookNotFoundError,
)
from nbstore.migration import zeppelin
from nbstore.notebook import ipynb
from nbstore.notebook.models import TEXT_LANGUAGE, Notebook, NotebookCell, NotebookConfig
from nbstore.remote.client import Fetcher, HttpFetcher

from .base import BLANK, BlankNotebook, LiteralContent, NotebookRepository, NotebookSource, RemoteUri

T = TypeVar("T")

LEGACY_SUFFIX = ".json"
_TITLE_SEPARATORS = re.compile(r"[\s\-_]+")
_LEADING_SLASHES = re.compile(r"^/+")


def default_title(path: str) -> str:
    """Human readable title from the last segment of an extension-less path."""
    return _TITLE_SEPARATORS.sub(" ", path.split("/")[-1]).strip()


class FileNotebookRepository(NotebookRepository):
    """Stores each notebook as a file below ``config.root``.

    Blocking filesystem and network work runs on ``executor``; when none is
    given the repository owns a thread pool that :meth:`close` shuts down.
    The store does no locking: two concurrent creations of the same path can
    both pass the existence check, and the last write wins.
    """

    def __init__(
        self,
        config: StoreConfig,
        defaults: NotebookDefaultsConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.root = Path(os.path.abspath(config.root))
        self.extension = config.default_extension
        self.max_depth = config.max_depth
        self.defaults = defaults or NotebookDefaultsConfig()

        self._owns_fetcher = fetcher is None
        self.fetcher: Fetcher = fetcher if fetcher is not None else HttpFetcher()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.max_workers, thread_name_prefix="nbstore"
        )

    @classmethod
    def from_config(cls, config: AppConfig, *, executor: Executor | None = None) -> "FileNotebookRepository":
        repository = cls(
            config.store,
            config.notebook,
            fetcher=HttpFetcher(config.fetch),
            executor=executor,
        )
        repository._owns_fetcher = True
        return repository

    # ------------------------------------------------------------------
    # lifecycle

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        if self._owns_fetcher and isinstance(self.fetcher, HttpFetcher):
            self.fetcher.close()

    async def __aenter__(self) -> "FileNotebookRepository":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        # shutting down waits for pending work, so keep it off the event loop
        await asyncio.to_thread(self.close)

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    # ------------------------------------------------------------------
    # paths

    def path_of(self, relative: str) -> Path:
        return self.root / relative

    def depth_of(self, relative: str) -> int:
        """Count the segments ``relative`` adds below the root.

        The joined path is normalised lexically (``.`` and ``..`` collapsed,
        symlinks untouched), then the segments it shares with the root as a
        common prefix are dropped and the rest are counted.
        """
        # POSIX keeps a leading "//" as a separate root
        relative = _LEADING_SLASHES.sub("/", relative)
        full = Path(os.path.normpath(self.path_of(relative))).parts
        shared = 0
        for segment, root_segment in zip(full, self.root.parts):
            if segment != root_segment:
                break
            shared += 1
        return len(full) - shared

    def normalize_path(self, relative: str) -> str:
        """Strip leading slashes and ensure exactly one trailing notebook extension."""
        ext = f".{self.extension}"
        return relative.lstrip("/").removesuffix(ext) + ext

    def is_notebook(self, path: str | Path) -> bool:
        return str(path).endswith(f".{self.extension}")

    def _ensure_inside_root(self, relative: str) -> None:
        target = Path(os.path.normpath(self.path_of(relative)))
        if not target.is_relative_to(self.root) or target == self.root:
            raise InvalidNotebookPathError(f"Input path ({relative}) resolves outside the notebook root")

    # ------------------------------------------------------------------
    # raw I/O

    def _read_text(self, relative: str) -> str:
        target = self.path_of(relative)
        logger.debug("Reading {}", target)
        try:
            return target.read_bytes().decode("utf-8")
        except FileNotFoundError as exc:
            raise NotebookNotFoundError(f"Notebook not found: {relative}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise NotebookIOError(f"Failed to read {relative}: {exc}") from exc

    def _write_text(self, relative: str, content: str) -> None:
        target = self.path_of(relative)
        logger.debug("Writing {} ({} chars)", target, len(content))
        try:
            if target.parent != self.root:
                target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content.encode("utf-8"))
        except OSError as exc:
            raise NotebookIOError(f"Failed to write {relative}: {exc}") from exc

    async def load_string(self, relative: str) -> str:
        return await self._run(self._read_text, relative)

    async def write_string(self, relative: str, content: str) -> None:
        """Overwrite ``relative`` with ``content``. Not atomic: a crash can leave a partial file."""
        await self._run(self._write_text, relative, content)

    # ------------------------------------------------------------------
    # listing

    def _walk_notebooks(self) -> list[str]:
        found: list[str] = []

        def visit(directory: Path, depth: int, ancestors: frozenset[str]) -> None:
            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as exc:
                raise NotebookIOError(f"Failed to list {directory}: {exc}") from exc

            for entry in entries:
                try:
                    is_dir = entry.is_dir()
                    is_file = entry.is_file()
                except OSError as exc:
                    raise NotebookIOError(f"Failed to inspect {entry.path}: {exc}") from exc

                if is_file and self.is_notebook(entry.name):
                    found.append(Path(entry.path).relative_to(self.root).as_posix())
                elif is_dir and depth < self.max_depth:
                    real = os.path.realpath(entry.path)
                    if real in ancestors:
                        raise NotebookIOError(f"File system loop detected at {entry.path}")
                    visit(Path(entry.path), depth + 1, ancestors | {real})

        visit(self.root, 1, frozenset({os.path.realpath(self.root)}))
        return found

    async def list_notebooks(self) -> list[str]:
        notebooks = await self._run(self._walk_notebooks)
        logger.debug("Found {} notebooks under {}", len(notebooks), self.root)
        return notebooks

    # ------------------------------------------------------------------
    # notebooks

    async def notebook_exists(self, path: str) -> bool:
        return await self._run(self.path_of(path).exists)

    async def load_notebook(self, path: str) -> Notebook:
        self._ensure_inside_root(path)
        text = await self.load_string(path)
        return ipynb.deserialize(text, path)

    async def save_notebook(self, path: str, notebook: Notebook) -> None:
        self._ensure_inside_root(path)
        await self.write_string(path, ipynb.serialize(notebook))

    def empty_notebook(self, path: str, title: str) -> Notebook:
        defaults = self.defaults
        config = NotebookConfig(
            dependencies={lang: list(deps) for lang, deps in defaults.dependencies.items()},
            exclusions=list(defaults.exclusions),
            repositories=[repo.model_dump(exclude_none=True) for repo in defaults.repositories],
            spark=dict(defaults.spark),
        )
        cell = NotebookCell(0, TEXT_LANGUAGE, f"# {title}\n\nThis is a text cell. Start editing!")
        return Notebook(path=path, cells=[cell], config=config)

    async def create_notebook(self, path: str, source: NotebookSource = BLANK) -> str:
        legacy = isinstance(source, LiteralContent) and path.endswith(LEGACY_SUFFIX)
        ext_path = self.normalize_path(path.removesuffix(LEGACY_SUFFIX) if legacy else path)

        if self.depth_of(path) > self.max_depth:
            raise InvalidNotebookPathError(f"Input path ({path}) too deep, max_depth is {self.max_depth}")
        self._ensure_inside_root(ext_path)

        if await self.notebook_exists(ext_path):
            raise NotebookExistsError(ext_path)

        if isinstance(source, RemoteUri):
            content = await self._run(self.fetcher.fetch, source.uri)
            await self.write_string(ext_path, content)
        elif isinstance(source, LiteralContent):
            if legacy:
                converted = zeppelin.convert(source.content)
                await self.write_string(ext_path, ipynb.dumps(converted))
            else:
                await self.write_string(ext_path, source.content)
        elif isinstance(source, BlankNotebook):
            title = default_title(ext_path.removesuffix(f".{self.extension}"))
            await self.save_notebook(ext_path, self.empty_notebook(ext_path, title))
        else:
            raise TypeError(f"Unsupported notebook source: {source!r}")

        logger.info("Created notebook {} ({})", ext_path, type(source).__name__)
        return ext_path


__all__ = ["FileNotebookRepository", "LEGACY_SUFFIX", "default_title"]
