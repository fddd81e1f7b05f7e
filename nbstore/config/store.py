"""Configuration for the directory-backed notebook store."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from .base import BaseConfig


class StoreConfig(BaseConfig):
    """Where notebooks live and which files count as notebooks."""

    root: Path = Field(..., description="Repository root directory holding every notebook")
    default_extension: str = Field(
        "ipynb",
        min_length=1,
        description="File extension (without the dot) that marks a file as a notebook",
    )
    max_depth: int = Field(
        4,
        ge=1,
        description="How many path segments below the root notebooks may be created and listed",
    )
    max_workers: int = Field(
        4,
        ge=1,
        description="Worker threads for filesystem and network work when no executor is shared",
    )

    @field_validator("default_extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        stripped = value.strip().lstrip(".")
        if not stripped:
            raise ValueError("default_extension must contain more than dots")
        return stripped


__all__ = ["StoreConfig"]
