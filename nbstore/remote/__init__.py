"""Remote notebook retrieval."""

from __future__ import annotations

from .client import Fetcher, HttpFetcher

__all__ = ["Fetcher", "HttpFetcher"]
