"""In-memory notebook document model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

TEXT_LANGUAGE = "text"


@dataclass(slots=True)
class NotebookCell:
    """A single cell; ``language == "text"`` marks a markdown cell."""

    id: int
    language: str
    content: str

    @property
    def is_text(self) -> bool:
        return self.language == TEXT_LANGUAGE


@dataclass(slots=True)
class NotebookConfig:
    """Per-notebook runtime configuration. ``None`` means "not set"."""

    dependencies: dict[str, list[str]] | None = None
    exclusions: list[str] | None = None
    repositories: list[dict[str, Any]] | None = None
    spark: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        values = {
            "dependencies": self.dependencies,
            "exclusions": self.exclusions,
            "repositories": self.repositories,
            "spark": self.spark,
        }
        return {key: value for key, value in values.items() if value is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NotebookConfig":
        return cls(
            dependencies=data.get("dependencies"),
            exclusions=data.get("exclusions"),
            repositories=data.get("repositories"),
            spark=data.get("spark"),
        )


@dataclass(slots=True)
class Notebook:
    """Ordered cells plus an optional configuration block."""

    path: str
    cells: list[NotebookCell] = field(default_factory=list)
    config: NotebookConfig | None = None


__all__ = ["TEXT_LANGUAGE", "Notebook", "NotebookCell", "NotebookConfig"]
