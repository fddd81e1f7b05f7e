"""HTTP settings used when notebooks are imported from a URL."""

from __future__ import annotations

import os

from pydantic import Field

from .base import BaseConfig

_ENV_PREFIX = "env:"


class FetchConfig(BaseConfig):
    """Remote fetch behaviour."""

    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field("nbstore/0.1", min_length=1, description="User-Agent header value")
    token: str | None = Field(
        None,
        description="Bearer token sent with every request, can use 'env:VAR_NAME' format",
    )

    @property
    def token_secret(self) -> str | None:
        """Return the bearer token, reading ``env:VAR`` references from the environment.

        A reference to an unset or empty variable raises :class:`EnvironmentError`.
        """

        if self.token is None or not self.token.startswith(_ENV_PREFIX):
            return self.token
        var_name = self.token.removeprefix(_ENV_PREFIX).strip()
        secret = os.getenv(var_name)
        if not secret:
            raise EnvironmentError(f"Fetch token variable '{var_name}' is not set")
        return secret


__all__ = ["FetchConfig"]
