from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from loguru import logger

from nbstore import cli
from nbstore.cli import main

from ..utils import logger_to_stderr, zeppelin_note


@pytest.fixture(autouse=True)
def _reset_cli_sink() -> Any:
    yield
    if cli._sink_id is not None:
        logger.remove(cli._sink_id)
        cli._sink_id = None


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "notebooks"
    root.mkdir()
    return root


@pytest.fixture()
def config_path(tmp_path: Path, store_root: Path) -> Path:
    config_file = tmp_path / "nbstore.toml"
    config_file.write_text(
        f"""
        logging_level = "WARNING"

        [store]
        root = "{store_root.as_posix()}"

        [notebook]
        exclusions = ["org.slf4j:slf4j-log4j12"]
        """,
        encoding="utf-8",
    )
    return config_file


def test_main_without_command_warns(config_path: Path, capsys: Any) -> None:
    with logger_to_stderr():
        exit_code = main(["--config", str(config_path)])

    assert exit_code == 0
    assert "No command provided" in capsys.readouterr().err


def test_create_blank_and_list(config_path: Path, store_root: Path, capsys: Any) -> None:
    assert main(["--config", str(config_path), "create", "team/First Notebook"]) == 0
    assert main(["--config", str(config_path), "create", "/second.ipynb"]) == 0
    created = capsys.readouterr().out.splitlines()
    assert created == ["team/First Notebook.ipynb", "second.ipynb"]
    assert (store_root / "team" / "First Notebook.ipynb").exists()

    assert main(["--config", str(config_path), "list"]) == 0
    assert capsys.readouterr().out.splitlines() == ["second.ipynb", "team/First Notebook.ipynb"]


def test_show_summarises_cells(config_path: Path, capsys: Any) -> None:
    main(["--config", str(config_path), "create", "intro_notes"])
    capsys.readouterr()

    assert main(["--config", str(config_path), "show", "intro_notes.ipynb"]) == 0

    output = capsys.readouterr().out.splitlines()
    assert output == ["intro_notes.ipynb: 1 cells", "  [0] text: # intro notes"]


def test_create_from_zeppelin_file(config_path: Path, store_root: Path, tmp_path: Path, capsys: Any) -> None:
    legacy = tmp_path / "note.json"
    legacy.write_text(zeppelin_note({"text": "%pyspark\nprint(1)"}), encoding="utf-8")

    exit_code = main(
        ["--config", str(config_path), "create", "imported/note.json", "--content-file", str(legacy)]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "imported/note.ipynb"
    written = json.loads((store_root / "imported" / "note.ipynb").read_text(encoding="utf-8"))
    assert written["cells"][0]["metadata"] == {"language": "python"}


def test_create_from_uri(
    config_path: Path, store_root: Path, monkeypatch: pytest.MonkeyPatch, capsys: Any
) -> None:
    requested: list[str] = []

    def _fake_fetch(self: Any, uri: str) -> str:
        requested.append(uri)
        return '{"cells": []}'

    monkeypatch.setattr("nbstore.remote.client.HttpFetcher.fetch", _fake_fetch)

    exit_code = main(["--config", str(config_path), "create", "remote", "--uri", "https://example.com/x.ipynb"])

    assert exit_code == 0
    assert requested == ["https://example.com/x.ipynb"]
    assert (store_root / "remote.ipynb").read_text(encoding="utf-8") == '{"cells": []}'


def test_create_existing_fails(config_path: Path, store_root: Path) -> None:
    (store_root / "taken.ipynb").write_text("keep", encoding="utf-8")

    exit_code = main(["--config", str(config_path), "create", "taken"])

    assert exit_code == 1
    assert (store_root / "taken.ipynb").read_text(encoding="utf-8") == "keep"


def test_create_rejects_both_sources(config_path: Path, tmp_path: Path) -> None:
    content = tmp_path / "content.ipynb"
    content.write_text("{}", encoding="utf-8")

    exit_code = main(
        [
            "--config",
            str(config_path),
            "create",
            "both",
            "--uri",
            "https://example.com/x",
            "--content-file",
            str(content),
        ]
    )

    assert exit_code == 2


def test_show_missing_notebook_fails(config_path: Path) -> None:
    assert main(["--config", str(config_path), "show", "ghost.ipynb"]) == 1


def test_config_check_json(config_path: Path, capsys: Any) -> None:
    exit_code = main(["--config", str(config_path), "config", "check", "--format", "json"])

    assert exit_code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["status"] == "ok"
    assert result["warnings"] == []


def test_config_check_missing_file(tmp_path: Path) -> None:
    exit_code = main(["--config", str(tmp_path / "missing.toml"), "config", "check"])

    assert exit_code == 2
