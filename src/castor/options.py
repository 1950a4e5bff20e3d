"""Chat options: caller-supplied tuning parameters for one completion."""

from __future__ import annotations

from dataclasses import dataclass

from castor.errors import ConfigurationError

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9


@dataclass(frozen=True)
class ChatOptions:
    """Generation settings for `chat()` and `OpenAIProvider.generate()`."""

    model: str
    temperature: float = DEFAULT_TEMPERATURE
    top_p: float = DEFAULT_TOP_P
    #: ``None`` and ``0`` both leave the output budget to the provider.
    max_tokens: int | None = None
    #: Send system messages with the user role.
    raw: bool = False
    #: Attach the hosted web search tool.
    search: bool = False
    #: Timezone used to localize search results; ignored unless *search*.
    search_location: str | None = None

    def __post_init__(self) -> None:
        """Validate option shapes early for clear errors."""
        if not 0.0 <= self.temperature <= 2.0:
            raise ConfigurationError(
                f"temperature must be between 0 and 2, got {self.temperature}",
            )
        if not 0.0 <= self.top_p <= 1.0:
            raise ConfigurationError(
                f"top_p must be between 0 and 1, got {self.top_p}",
            )

        if self.max_tokens is not None and (
            isinstance(self.max_tokens, bool)
            or not isinstance(self.max_tokens, int)
            or self.max_tokens < 0
        ):
            raise ConfigurationError(
                "max_tokens must be a non-negative integer",
                hint="Pass max_tokens=4096, or leave it unset for the model default.",
            )

        if self.search_location is not None and not isinstance(
            self.search_location, str
        ):
            raise ConfigurationError(
                "search_location must be a string",
                hint="Pass an IANA timezone such as 'America/Los_Angeles'.",
            )
