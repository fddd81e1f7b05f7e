"""Shared configuration primitives."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

ConfigT = TypeVar("ConfigT", bound="BaseConfig")


class BaseConfig(BaseModel):
    """Base class for every configuration model.

    Unknown keys are rejected so that typos in TOML files surface early.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


def load_config(config_cls: type[ConfigT], path: Path) -> ConfigT:
    """Load ``path`` (TOML) and validate it into ``config_cls``.

    Raises :class:`FileNotFoundError` when the file does not exist and
    :class:`pydantic.ValidationError` when the content does not match the model.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

    return config_cls.model_validate(data)


__all__ = ["BaseConfig", "load_config"]
