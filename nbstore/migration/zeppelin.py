"""Convert legacy Zeppelin notes (``note.json``) into Jupyter notebooks."""

from __future__ import annotations

import html
import json
import re

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nbstore.errors import NotebookConversionError
from nbstore.notebook.ipynb import (
    DEFAULT_LANGUAGE,
    JupyterCell,
    JupyterNotebook,
    JupyterOutput,
    split_lines,
)

DIRECTIVE_RE = re.compile(r"^%(?P<name>[\w.\-]+)[ \t]*(?:\r?\n)?")

MARKDOWN_INTERPRETERS = frozenset({"md", "markdown"})
PYTHON_INTERPRETERS = frozenset({"python", "pyspark", "ipython", "ipyspark"})
SQL_INTERPRETERS = frozenset({"sql", "jdbc", "hive"})


class _ZeppelinModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ZeppelinOutput(_ZeppelinModel):
    type: str = "TEXT"
    data: str = ""

    def to_jupyter_output(self) -> JupyterOutput:
        kind = self.type.upper()
        if kind == "HTML":
            return JupyterOutput(output_type="display_data", data={"text/html": self.data}, metadata={})
        if kind == "TABLE":
            return JupyterOutput(
                output_type="display_data",
                data={"text/plain": self.data, "text/html": _table_html(self.data)},
                metadata={},
            )
        if kind == "IMG":
            return JupyterOutput(output_type="display_data", data={"image/png": self.data}, metadata={})
        return JupyterOutput(output_type="stream", name="stdout", text=split_lines(self.data))


class ZeppelinResult(_ZeppelinModel):
    code: str | None = None
    msg: list[ZeppelinOutput] = Field(default_factory=list)


class ZeppelinParagraph(_ZeppelinModel):
    text: str | None = None
    results: ZeppelinResult | None = None

    def to_jupyter_cell(self) -> JupyterCell | None:
        if not self.text or not self.text.strip():
            return None

        interpreter, body = _split_directive(self.text)
        language = interpreter_language(interpreter)
        if language == "markdown":
            return JupyterCell(cell_type="markdown", source=split_lines(body))

        outputs = [msg.to_jupyter_output() for msg in self.results.msg] if self.results else []
        return JupyterCell(
            cell_type="code",
            metadata={"language": language},
            source=split_lines(body),
            outputs=outputs,
        )


class ZeppelinNotebook(_ZeppelinModel):
    name: str | None = None
    paragraphs: list[ZeppelinParagraph] = Field(default_factory=list)

    def to_jupyter_notebook(self) -> JupyterNotebook:
        cells = [cell for cell in (p.to_jupyter_cell() for p in self.paragraphs) if cell is not None]
        code_languages = [
            cell.metadata["language"] for cell in cells if cell.cell_type == "code" and cell.metadata
        ]
        language = code_languages[0] if code_languages else DEFAULT_LANGUAGE
        return JupyterNotebook(metadata={"language_info": {"name": language}}, cells=cells)


def interpreter_language(interpreter: str | None) -> str:
    """Map a Zeppelin interpreter directive (``spark.pyspark``) to a cell language."""
    if interpreter is None:
        return DEFAULT_LANGUAGE
    name = interpreter.lower().rsplit(".", 1)[-1]
    if name in MARKDOWN_INTERPRETERS:
        return "markdown"
    if name in PYTHON_INTERPRETERS:
        return "python"
    if name in SQL_INTERPRETERS:
        return "sql"
    return DEFAULT_LANGUAGE


def _split_directive(text: str) -> tuple[str | None, str]:
    match = DIRECTIVE_RE.match(text.lstrip())
    if match is None:
        return None, text
    stripped = text.lstrip()
    return match.group("name"), stripped[match.end():]


def _table_html(data: str) -> str:
    rows = [line.split("\t") for line in data.splitlines() if line]
    if not rows:
        return "<table></table>"
    header, *body = rows
    parts = ["<table>", "<tr>" + "".join(f"<th>{html.escape(col)}</th>" for col in header) + "</tr>"]
    for row in body:
        parts.append("<tr>" + "".join(f"<td>{html.escape(col)}</td>" for col in row) + "</tr>")
    parts.append("</table>")
    return "".join(parts)


def convert(raw_text: str) -> JupyterNotebook:
    """Parse Zeppelin note JSON and convert it to a Jupyter notebook.

    Raises :class:`NotebookConversionError` if ``raw_text`` is not JSON or does
    not have the shape of a Zeppelin note.
    """
    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise NotebookConversionError(f"Legacy notebook is not valid JSON: {exc}") from exc

    try:
        note = ZeppelinNotebook.model_validate(parsed)
    except ValidationError as exc:
        raise NotebookConversionError(f"Legacy notebook has an unexpected structure: {exc}") from exc

    notebook = note.to_jupyter_notebook()
    logger.debug(
        "Converted Zeppelin note {!r}: {} paragraphs -> {} cells",
        note.name,
        len(note.paragraphs),
        len(notebook.cells),
    )
    return notebook


__all__ = [
    "ZeppelinNotebook",
    "ZeppelinOutput",
    "ZeppelinParagraph",
    "ZeppelinResult",
    "convert",
    "interpreter_language",
]
