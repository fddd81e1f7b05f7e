"""Defaults copied into every blank notebook."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import BaseConfig


class RepositoryConfig(BaseConfig):
    """A dependency repository (ivy, maven or pip index)."""

    kind: Literal["ivy", "maven", "pip"] = Field(..., description="Repository flavour")
    url: str = Field(..., min_length=1, description="Base URL of the repository")
    artifact_pattern: str | None = Field(None, description="Ivy artifact pattern")
    metadata_pattern: str | None = Field(None, description="Ivy metadata pattern")
    changing: bool | None = Field(None, description="Whether artifacts may change in place")


class NotebookDefaultsConfig(BaseConfig):
    """Settings embedded verbatim into the configuration block of new notebooks."""

    dependencies: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Dependency coordinates keyed by language",
    )
    exclusions: list[str] = Field(
        default_factory=list,
        description="Transitive dependencies to exclude",
    )
    repositories: list[RepositoryConfig] = Field(
        default_factory=list,
        description="Extra repositories used to resolve dependencies",
    )
    spark: dict[str, str] = Field(
        default_factory=dict,
        description="Spark properties applied to the notebook runtime",
    )


__all__ = ["NotebookDefaultsConfig", "RepositoryConfig"]
