"""Castor: OpenAI Responses API adapter with web search and Copilot support.

Public API:
    - chat(): Single completion with citations appended
    - list_models(): Model ids served by the configured endpoint
    - ChatMessage / ChatOptions: Request inputs
    - Config: Configuration dataclass
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING

from castor.citations import Citation, append_citations, collate_citations
from castor.config import Config
from castor.errors import APIError, CastorError, ConfigurationError
from castor.options import ChatOptions
from castor.providers.models import ChatMessage
from castor.transport import (
    AsyncCopilotTransport,
    CopilotTransport,
    is_github_copilot_url,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from castor.providers.base import Provider

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("castor-ai")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("castor").addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


async def chat(
    messages: Sequence[ChatMessage],
    options: ChatOptions,
    *,
    config: Config,
) -> str:
    """Run one completion and return its text with a Sources section appended.

    Args:
        messages: The conversation, oldest turn first.
        options: Model and generation settings.
        config: Endpoint and credentials.

    Returns:
        The answer text. When web search produced citations, a deduplicated
        ``## Sources`` block follows the text.

    Example:
        config = Config(api_base_url="https://api.githubcopilot.com")
        answer = await chat(
            [ChatMessage(role="user", content="What changed in Python 3.13?")],
            ChatOptions(model="gpt-4o", search=True),
            config=config,
        )
        print(answer)
    """
    provider = _get_provider(config)
    if not options.raw and provider.needs_raw_mode(options.model):
        logger.debug("Model %s requires raw mode", options.model)
        options = dataclasses.replace(options, raw=True)

    try:
        response = await provider.generate(messages, options)
    finally:
        await _close_quietly(provider)

    return append_citations(response.text, response.citations)


async def list_models(*, config: Config) -> list[str]:
    """Return the sorted model ids served by the configured endpoint."""
    provider = _get_provider(config)
    try:
        return await provider.list_models()
    finally:
        await _close_quietly(provider)


async def _close_quietly(provider: Provider) -> None:
    try:
        await provider.aclose()
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        # Cleanup should never mask the primary failure.
        logger.warning("Provider cleanup failed: %s", exc)


def _get_provider(config: Config) -> Provider:
    """Build the provider for *config*."""
    from castor.providers.openai import OpenAIProvider

    return OpenAIProvider(config)


# Re-export for convenience
__all__ = [
    "APIError",
    "AsyncCopilotTransport",
    "CastorError",
    "ChatMessage",
    "ChatOptions",
    "Citation",
    "Config",
    "ConfigurationError",
    "CopilotTransport",
    "append_citations",
    "chat",
    "collate_citations",
    "is_github_copilot_url",
    "list_models",
]
