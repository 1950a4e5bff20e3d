"""OpenAI provider implementation."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI, DefaultAsyncHttpxClient

from castor.citations import Citation
from castor.providers._errors import wrap_provider_error
from castor.providers.models import (
    ProviderRequest,
    ProviderResponse,
    UserLocation,
    WebSearchTool,
)
from castor.transport import GITHUB_API_VERSION_HEADER, AsyncCopilotTransport

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    import httpx

    from castor.config import Config
    from castor.options import ChatOptions
    from castor.providers.models import ChatMessage

logger = logging.getLogger(__name__)

# Reasoning models that reject system prompts and sampling parameters.
_RAW_MODE_MODEL_PREFIXES: tuple[str, ...] = ("o1", "o3", "o4")


def build_response_params(
    messages: Sequence[ChatMessage], options: ChatOptions
) -> ProviderRequest:
    """Map a conversation and chat options onto a Responses API request."""
    input_items: list[dict[str, Any]] = []
    for message in messages:
        item = _encode_message(message, raw=options.raw)
        if item is not None:
            input_items.append(item)

    max_output_tokens: int | None = None
    if options.max_tokens:
        max_output_tokens = options.max_tokens

    tools: list[WebSearchTool] | None = None
    if options.search:
        user_location: UserLocation | None = None
        if options.search_location:
            user_location = UserLocation(timezone=options.search_location)
        tools = [WebSearchTool(user_location=user_location)]

    return ProviderRequest(
        model=options.model,
        input=input_items,
        temperature=options.temperature,
        top_p=options.top_p,
        max_output_tokens=max_output_tokens,
        tools=tools,
    )


def _encode_message(message: ChatMessage, *, raw: bool) -> dict[str, Any] | None:
    """Convert a chat message into a Responses API input item."""
    if not message.content:
        return None
    role = message.role.lower()
    if raw and role == "system":
        role = "user"
    text_type = "output_text" if role == "assistant" else "input_text"
    return {
        "role": role,
        "content": [{"type": text_type, "text": message.content}],
    }


def extract_citations(response: Any) -> Iterator[Citation]:
    """Yield ``url_citation`` annotations from a Responses API response, in order."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) != "output_text":
                continue
            for annotation in getattr(content, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                yield Citation(url=annotation.url, title=annotation.title)


def needs_raw_mode(model: str) -> bool:
    """Return True for models that must run in raw mode."""
    return model.lower().startswith(_RAW_MODE_MODEL_PREFIXES)


class OpenAIProvider:
    """OpenAI Responses API provider.

    When the configured base URL is a GitHub Copilot endpoint, the client is
    built on an ``AsyncCopilotTransport`` so every request carries the GitHub
    API version header.
    """

    def __init__(self, config: Config) -> None:
        """Initialize with a resolved configuration."""
        self.config = config
        self._client: Any = None
        self._http_client: httpx.AsyncClient | None = None

    def _get_client(self) -> Any:
        """Lazily initialize and return the OpenAI client."""
        if self._client is None:
            kwargs: dict[str, Any] = {"api_key": self.config.api_key}
            if self.config.api_base_url:
                kwargs["base_url"] = self.config.api_base_url
            if self.config.is_copilot:
                logger.debug(
                    "GitHub Copilot endpoint detected; adding %s header",
                    GITHUB_API_VERSION_HEADER,
                )
                self._http_client = DefaultAsyncHttpxClient(
                    transport=AsyncCopilotTransport()
                )
                kwargs["http_client"] = self._http_client
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    def needs_raw_mode(self, model: str) -> bool:
        """Whether *model* must run in raw mode."""
        return needs_raw_mode(model)

    async def generate(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions,
    ) -> ProviderResponse:
        """Generate a response using OpenAI's responses endpoint."""
        request = build_response_params(messages, options)
        if needs_raw_mode(options.model):
            request = dataclasses.replace(request, temperature=None, top_p=None)
        client = self._get_client()

        try:
            response = await client.responses.create(**request.to_kwargs())
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise wrap_provider_error(
                e,
                provider="openai",
                phase="generate",
                message="OpenAI generate failed",
            ) from e

        text = getattr(response, "output_text", "") or ""
        response_id = getattr(response, "id", None)
        usage_raw = getattr(response, "usage", None)
        usage: dict[str, int] = {}
        if usage_raw is not None:
            usage = {
                "input_tokens": int(getattr(usage_raw, "input_tokens", 0)),
                "output_tokens": int(getattr(usage_raw, "output_tokens", 0)),
                "total_tokens": int(getattr(usage_raw, "total_tokens", 0)),
            }

        return ProviderResponse(
            text=text,
            usage=usage,
            citations=list(extract_citations(response)),
            response_id=response_id if isinstance(response_id, str) else None,
            finish_reason=_extract_finish_reason(response),
        )

    async def list_models(self) -> list[str]:
        """Return the sorted ids of models available to this key."""
        client = self._get_client()
        try:
            ids = [model.id async for model in client.models.list()]
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise wrap_provider_error(
                e,
                provider="openai",
                phase="list_models",
                message="OpenAI model listing failed",
            ) from e
        return sorted(ids)

    async def aclose(self) -> None:
        """Close underlying async client resources."""
        client = self._client
        if client is None:
            return
        self._client = None
        self._http_client = None
        await client.close()


def _extract_finish_reason(response: Any) -> str | None:
    """Extract OpenAI finish reason, preferring incomplete_details.reason.

    The Responses API exposes ``response.status`` (a string like "completed" or
    "incomplete") and, when incomplete, an ``IncompleteDetails`` model with a
    ``.reason`` field ("max_output_tokens" or "content_filter").
    """
    status = getattr(response, "status", None)
    if not isinstance(status, str):
        return None

    normalized_status = status.lower()
    if normalized_status == "incomplete":
        details = getattr(response, "incomplete_details", None)
        reason = getattr(details, "reason", None) if details is not None else None
        if isinstance(reason, str) and reason:
            return reason.lower()

    return normalized_status
