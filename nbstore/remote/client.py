"""HTTP client used to import notebooks from a URL."""

from __future__ import annotations

from typing import Protocol

import requests
from loguru import logger

from nbstore.config.fetch import FetchConfig
from nbstore.errors import FetchError


class Fetcher(Protocol):
    def fetch(self, uri: str) -> str:
        """Return the body of ``uri`` as text or raise :class:`FetchError`."""


class HttpFetcher:
    """Blocking GET over a shared :class:`requests.Session`."""

    def __init__(self, config: FetchConfig | None = None, session: requests.Session | None = None):
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})
        token = self.config.token_secret
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def fetch(self, uri: str) -> str:
        logger.debug("Fetching notebook content from {}", uri)
        try:
            response = self.session.get(uri, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {uri}: {exc}") from exc

        # Notebooks are UTF-8; requests assumes ISO-8859-1 when no charset is sent.
        if response.encoding is None or response.encoding.lower() == "iso-8859-1":
            response.encoding = "utf-8"
        return response.text

    def close(self) -> None:
        self.session.close()


__all__ = ["Fetcher", "HttpFetcher"]
