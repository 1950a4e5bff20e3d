"""Configuration: Frozen Config resolved from arguments and environment."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import find_dotenv, load_dotenv

from castor.errors import ConfigurationError
from castor.transport import is_github_copilot_url

_API_KEY_ENV_VAR = "OPENAI_API_KEY"
_API_BASE_URL_ENV_VAR = "OPENAI_API_BASE_URL"


@dataclass(frozen=True)
class Config:
    """Immutable client configuration.

    API key and base URL are auto-resolved from the environment (and a local
    ``.env`` file) when not passed explicitly.

    Example:
        config = Config(api_base_url="https://api.githubcopilot.com")
        # API key is automatically resolved from OPENAI_API_KEY
    """

    #: Auto-resolved from ``OPENAI_API_KEY`` when *None*.
    api_key: str | None = None
    #: Auto-resolved from ``OPENAI_API_BASE_URL`` when *None*. Empty means the
    #: SDK default endpoint.
    api_base_url: str | None = None

    def __post_init__(self) -> None:
        """Auto-resolve settings from the environment and validate them."""
        if self.api_key is None or self.api_base_url is None:
            load_dotenv(find_dotenv(usecwd=True))

        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(_API_KEY_ENV_VAR))
        if self.api_base_url is None:
            object.__setattr__(
                self, "api_base_url", os.environ.get(_API_BASE_URL_ENV_VAR, "")
            )

        if not self.api_key:
            raise ConfigurationError(
                "API key required for openai",
                hint=f"Set {_API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )

    @property
    def is_copilot(self) -> bool:
        """Whether the base URL is a GitHub Copilot endpoint."""
        return is_github_copilot_url(self.api_base_url or "")

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_base_url={self.api_base_url!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None})"
        )

    __repr__ = __str__
