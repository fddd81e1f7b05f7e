"""Configuration namespace for nbstore."""

from __future__ import annotations

from .app import AppConfig
from .base import BaseConfig, load_config
from .fetch import FetchConfig
from .notebook import NotebookDefaultsConfig, RepositoryConfig
from .store import StoreConfig

__all__ = [
    "AppConfig",
    "BaseConfig",
    "FetchConfig",
    "NotebookDefaultsConfig",
    "RepositoryConfig",
    "StoreConfig",
    "load_config",
]
