"""Command line interface for the notebook store."""

from __future__ import annotations

import asyncio
import contextlib
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from loguru import logger

from .config import AppConfig, load_config
from .config.inspector import check_config
from .errors import NotebookStoreError
from .repository import BLANK, FileNotebookRepository, LiteralContent, NotebookSource, RemoteUri


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    _config: AppConfig | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            logger.info("Loading configuration from {}", self.config_path)
            self._config = load_config(AppConfig, self.config_path)
            _configure_logging(self._config.logging_level)
        return self._config


app = typer.Typer(help="Manage a directory of notebooks")
config_app = typer.Typer(help="Validate configuration files")
app.add_typer(config_app, name="config")

_sink_id: int | None = None


def _configure_logging(level: str) -> None:
    global _sink_id
    if _sink_id is None:
        # loguru installs a DEBUG stderr sink with id 0 on import
        with contextlib.suppress(ValueError):
            logger.remove(0)
    else:
        logger.remove(_sink_id)
    _sink_id = logger.add(sys.stderr, level=level.upper())


def _default_config_path() -> Path:
    return Path.cwd() / "nbstore.toml"


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _run_with_repository(config: AppConfig, action: Any) -> Any:
    async def _runner() -> Any:
        async with FileNotebookRepository.from_config(config) as repository:
            return await action(repository)

    try:
        return asyncio.run(_runner())
    except NotebookStoreError as exc:
        logger.error("{}: {}", type(exc).__name__, exc)
        _exit(1)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
) -> None:
    """Initialise CLI state."""

    ctx.obj = CLIState(config_path=config.resolve())

    if ctx.invoked_subcommand is None:
        logger.warning("No command provided. Try 'list' or 'create PATH'.")
        _exit(0)


@app.command("list", help="List notebooks below the repository root")
def list_notebooks(ctx: typer.Context) -> None:
    config = _get_state(ctx).ensure_config()
    notebooks = _run_with_repository(config, lambda repo: repo.list_notebooks())
    for path in sorted(notebooks):
        typer.echo(path)


@app.command(help="Summarise the cells of a notebook")
def show(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Notebook path relative to the repository root"),
) -> None:
    config = _get_state(ctx).ensure_config()
    notebook = _run_with_repository(config, lambda repo: repo.load_notebook(path))

    typer.echo(f"{notebook.path}: {len(notebook.cells)} cells")
    for cell in notebook.cells:
        first_line = cell.content.splitlines()[0] if cell.content else ""
        typer.echo(f"  [{cell.id}] {cell.language}: {first_line}")


@app.command(help="Create a notebook from a URL, a file, or a blank template")
def create(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Notebook path relative to the repository root"),
    uri: str | None = typer.Option(None, "--uri", help="Import the notebook from this URL"),
    content_file: Path | None = typer.Option(
        None,
        "--content-file",
        exists=True,
        dir_okay=False,
        help="Import the notebook from a local file (.json paths are converted from Zeppelin)",
    ),
) -> None:
    if uri is not None and content_file is not None:
        raise typer.BadParameter("Use either --uri or --content-file, not both")

    config = _get_state(ctx).ensure_config()
    source: NotebookSource = BLANK
    if uri is not None:
        source = RemoteUri(uri)
    elif content_file is not None:
        source = LiteralContent(content_file.read_text(encoding="utf-8"))

    created = _run_with_repository(config, lambda repo: repo.create_notebook(path, source))
    typer.echo(created)


@config_app.command(help="Validate the configuration file")
def check(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for validation results (text or json)",
    ),
) -> None:
    state = _get_state(ctx)
    result, exit_code, _ = check_config(state.config_path)

    if format.lower() == "json":
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        _exit(exit_code)

    if result["status"] == "ok":
        logger.info("Configuration OK: {}", result["config_path"])
        for warning in result["warnings"]:
            logger.warning(warning)
    else:
        error: dict[str, Any] = result["error"]
        logger.error(
            "Configuration error ({}) for {}: {}",
            error["type"],
            result["config_path"],
            error["message"],
        )
        for detail in error.get("details", []):
            location = detail["loc"] or "<root>"
            logger.error("  - {}: {} ({})", location, detail["message"], detail["type"])

    _exit(exit_code)


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:
        return exc.exit_code
    except typer.BadParameter as exc:
        logger.error("{}", exc.format_message())
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
