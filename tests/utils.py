"""Helpers shared by the test suites."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger

from nbstore.errors import FetchError


@contextmanager
def logger_to_stderr(level: str = "INFO") -> Iterator[None]:
    """Temporarily route Loguru output to stderr for assertion."""

    handler_id = logger.add(sys.stderr, level=level)
    try:
        yield
    finally:
        logger.remove(handler_id)


def zeppelin_note(*paragraphs: dict[str, Any], name: str = "Legacy note") -> str:
    """Serialise a minimal Zeppelin ``note.json`` document."""

    return json.dumps({"name": name, "id": "2ABCDEF12", "paragraphs": list(paragraphs)})


class FakeFetcher:
    """Serves canned bodies keyed by URI and records every request."""

    def __init__(self, responses: dict[str, str] | None = None) -> None:
        self.responses = responses or {}
        self.requested: list[str] = []

    def fetch(self, uri: str) -> str:
        self.requested.append(uri)
        if uri not in self.responses:
            raise FetchError(f"404 for {uri}")
        return self.responses[uri]
