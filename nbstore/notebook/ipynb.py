"""Jupyter (nbformat 4) codec for :class:`~nbstore.notebook.models.Notebook`.

The on-disk canonical format is plain ``.ipynb`` JSON. Store-specific
settings live under ``metadata.config`` and each code cell records its
language under ``metadata.language`` so notebooks mixing languages survive a
round trip.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nbstore.errors import NotebookConversionError

from .models import TEXT_LANGUAGE, Notebook, NotebookCell, NotebookConfig

DEFAULT_LANGUAGE = "scala"


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines, keeping each line's terminator."""
    return text.splitlines(keepends=True)


class _JupyterModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class JupyterOutput(_JupyterModel):
    """One cell output. Only the fields relevant to ``output_type`` are set."""

    output_type: Literal["stream", "display_data", "execute_result", "error"]
    name: str | None = None
    text: list[str] | None = None
    data: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    execution_count: int | None = None
    ename: str | None = None
    evalue: str | None = None
    traceback: list[str] | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _text_as_lines(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_lines(value)
        return value


class JupyterCell(_JupyterModel):
    cell_type: Literal["markdown", "code", "raw"]
    execution_count: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    source: list[str] = Field(default_factory=list)
    outputs: list[JupyterOutput] | None = None

    @field_validator("source", mode="before")
    @classmethod
    def _source_as_lines(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_lines(value)
        return value

    @property
    def text(self) -> str:
        return "".join(self.source)


class JupyterNotebook(_JupyterModel):
    metadata: dict[str, Any] = Field(default_factory=dict)
    nbformat: int = 4
    nbformat_minor: int = 0
    cells: list[JupyterCell] = Field(default_factory=list)


def _to_json(raw: dict[str, Any]) -> str:
    return json.dumps(raw, indent=2, ensure_ascii=False)


def dumps(notebook: JupyterNotebook) -> str:
    """Pretty-print ``notebook`` as JSON, dropping null-valued fields."""
    return _to_json(notebook.model_dump(exclude_none=True))


def to_jupyter(notebook: Notebook) -> JupyterNotebook:
    cells: list[JupyterCell] = []
    for cell in notebook.cells:
        if cell.is_text:
            cells.append(JupyterCell(cell_type="markdown", source=split_lines(cell.content)))
        else:
            cells.append(
                JupyterCell(
                    cell_type="code",
                    metadata={"language": cell.language},
                    source=split_lines(cell.content),
                    outputs=[],
                )
            )

    code_languages = [cell.language for cell in notebook.cells if not cell.is_text]
    metadata: dict[str, Any] = {
        "language_info": {"name": code_languages[0] if code_languages else DEFAULT_LANGUAGE},
    }
    if notebook.config is not None:
        metadata["config"] = notebook.config.to_dict()
    return JupyterNotebook(metadata=metadata, cells=cells)


def _language_name(value: Any, path: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise NotebookConversionError(f"{path} has a non-string language name: {value!r}")


def from_jupyter(notebook: JupyterNotebook, path: str) -> Notebook:
    metadata = notebook.metadata
    language_info = metadata.get("language_info")
    if language_info is not None and not isinstance(language_info, dict):
        raise NotebookConversionError(f"{path} has malformed metadata.language_info: {language_info!r}")
    default_language = _language_name((language_info or {}).get("name"), path) or DEFAULT_LANGUAGE

    cells: list[NotebookCell] = []
    for index, cell in enumerate(notebook.cells):
        if cell.cell_type == "code":
            language = _language_name(cell.metadata.get("language"), path) or default_language
        else:
            language = TEXT_LANGUAGE
        cells.append(NotebookCell(id=index, language=language, content=cell.text))

    raw_config = metadata.get("config")
    config = NotebookConfig.from_dict(raw_config) if isinstance(raw_config, dict) else None
    return Notebook(path=path, cells=cells, config=config)


def serialize(notebook: Notebook) -> str:
    """Canonical JSON for ``notebook``.

    Null fields are dropped except ``execution_count`` on code cells, which
    nbformat 4 requires even when the cell has never run.
    """
    raw = to_jupyter(notebook).model_dump(exclude_none=True)
    for cell in raw["cells"]:
        if cell["cell_type"] == "code":
            cell.setdefault("execution_count", None)
    return _to_json(raw)


def deserialize(text: str, path: str) -> Notebook:
    """Parse canonical notebook JSON; malformed input raises :class:`NotebookConversionError`."""
    try:
        parsed = JupyterNotebook.model_validate_json(text)
    except ValidationError as exc:
        raise NotebookConversionError(f"{path} is not a valid notebook: {exc}") from exc
    return from_jupyter(parsed, path)


__all__ = [
    "DEFAULT_LANGUAGE",
    "JupyterCell",
    "JupyterNotebook",
    "JupyterOutput",
    "deserialize",
    "dumps",
    "from_jupyter",
    "serialize",
    "split_lines",
    "to_jupyter",
]
