"""Shared pytest fixtures for the notebook store."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from nbstore.config import NotebookDefaultsConfig, RepositoryConfig, StoreConfig  # noqa: E402
from nbstore.repository import FileNotebookRepository  # noqa: E402

from .utils import FakeFetcher  # noqa: E402


@pytest.fixture()
def notebook_root(tmp_path: Path) -> Path:
    root = tmp_path / "notebooks"
    root.mkdir()
    return root


@pytest.fixture()
def notebook_defaults() -> NotebookDefaultsConfig:
    return NotebookDefaultsConfig(
        dependencies={"scala": ["org.typelevel:cats-core_2.12:2.0.0"]},
        exclusions=["org.slf4j:slf4j-log4j12"],
        repositories=[RepositoryConfig(kind="maven", url="https://repo1.maven.org/maven2/")],
        spark={"spark.master": "local[*]"},
    )


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def repository(
    notebook_root: Path,
    notebook_defaults: NotebookDefaultsConfig,
    fake_fetcher: FakeFetcher,
) -> Iterator[FileNotebookRepository]:
    repo = FileNotebookRepository(
        StoreConfig(root=notebook_root),
        notebook_defaults,
        fetcher=fake_fetcher,
    )
    try:
        yield repo
    finally:
        repo.close()
