"""Importers for legacy notebook formats."""

from __future__ import annotations

from .zeppelin import ZeppelinNotebook, convert

__all__ = ["ZeppelinNotebook", "convert"]
