"""Domain models for the provider transport layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from castor.citations import Citation


@dataclass(frozen=True)
class ChatMessage:
    """A single conversation turn."""

    role: str
    content: str = ""


@dataclass(frozen=True)
class UserLocation:
    """Approximate user location used to localize web search results."""

    type: Literal["approximate"] = "approximate"
    #: IANA timezone name, e.g. ``"America/Los_Angeles"``.
    timezone: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.timezone is not None:
            payload["timezone"] = self.timezone
        return payload


@dataclass(frozen=True)
class WebSearchTool:
    """The hosted web search tool of the Responses API."""

    type: Literal["web_search_preview"] = "web_search_preview"
    user_location: UserLocation | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.user_location is not None:
            payload["user_location"] = self.user_location.to_dict()
        return payload


#: Tool variants a request can carry.
Tool = WebSearchTool


@dataclass(frozen=True)
class ProviderRequest:
    """A fully assembled Responses API request.

    ``max_output_tokens`` and ``tools`` use ``None`` for "not set"; an empty
    tool list is never produced.
    """

    model: str
    input: list[dict[str, Any]] = field(default_factory=list)
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None
    tools: list[Tool] | None = None

    def to_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments for ``client.responses.create()``."""
        kwargs: dict[str, Any] = {"model": self.model, "input": self.input}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.top_p is not None:
            kwargs["top_p"] = self.top_p
        if self.max_output_tokens is not None:
            kwargs["max_output_tokens"] = self.max_output_tokens
        if self.tools is not None:
            kwargs["tools"] = [t.to_dict() for t in self.tools]
        return kwargs


@dataclass
class ProviderResponse:
    """A standardized response from a provider generation call."""

    text: str = ""
    usage: dict[str, int] = field(default_factory=dict)
    citations: list[Citation] = field(default_factory=list)
    response_id: str | None = None
    finish_reason: str | None = None
