"""Validate configuration files and report problems in a structured form."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

from pydantic import ValidationError

from .app import AppConfig
from .base import load_config


def check_config(path: Path) -> tuple[dict[str, Any], int, AppConfig | None]:
    """Validate the configuration file and collect warnings.

    Returns a tuple of ``(result_dict, exit_code, config_instance_or_None)``.
    Exit codes: 0 ok, 1 unreadable TOML, 2 missing file, 3 validation error.
    """

    try:
        config = load_config(AppConfig, path)
    except FileNotFoundError as exc:
        return _error(path, "missing_file", str(exc)), 2, None
    except ValidationError as exc:
        result = _error(path, "validation_error", "Configuration validation failed")
        result["error"]["details"] = [
            {
                "loc": _format_error_location(err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        return result, 3, None
    except ValueError as exc:
        return _error(path, "invalid_format", str(exc)), 1, None

    result = {
        "status": "ok",
        "config_path": str(path),
        "warnings": _collect_warnings(config),
    }
    return result, 0, config


def _error(path: Path, kind: str, message: str) -> dict[str, Any]:
    return {
        "status": "error",
        "config_path": str(path),
        "error": {"type": kind, "message": message},
    }


def _format_error_location(location: Iterable[Union[int, str]]) -> str:
    return ".".join(str(part) for part in location)


def _collect_warnings(config: AppConfig) -> list[str]:
    warnings: list[str] = []

    root = config.store.root
    if not root.is_absolute():
        warnings.append(f"store.root '{root}' is relative; it will be resolved against the working directory")
    if not root.exists():
        warnings.append(f"store.root '{root}' does not exist; top-level notebooks cannot be written until it is created")
    elif not root.is_dir():
        warnings.append(f"store.root '{root}' is not a directory")
    if config.store.default_extension == "json":
        warnings.append("default_extension 'json' clashes with legacy notebook imports")

    return warnings


__all__ = ["check_config"]
