"""Application-level configuration models."""

from __future__ import annotations

from pydantic import Field

from nbstore.config.base import BaseConfig
from nbstore.config.fetch import FetchConfig
from nbstore.config.notebook import NotebookDefaultsConfig
from nbstore.config.store import StoreConfig


class AppConfig(BaseConfig):
    """Top-level runtime configuration."""

    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    store: StoreConfig = Field(..., description="Notebook store location and policy")
    notebook: NotebookDefaultsConfig = Field(
        default_factory=NotebookDefaultsConfig,
        description="Defaults embedded into newly created notebooks",
    )
    fetch: FetchConfig = Field(default_factory=FetchConfig, description="Remote import settings")


__all__ = ["AppConfig"]
