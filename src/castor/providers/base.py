"""Provider protocol: minimal interface for chat providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from castor.options import ChatOptions
    from castor.providers.models import ChatMessage, ProviderResponse


@runtime_checkable
class Provider(Protocol):
    """Minimal provider protocol: generate, list_models, aclose."""

    async def generate(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions,
    ) -> ProviderResponse:
        """Run one completion for the conversation."""
        ...

    async def list_models(self) -> list[str]:
        """Return the model ids the endpoint serves."""
        ...

    def needs_raw_mode(self, model: str) -> bool:
        """Whether *model* must run in raw mode."""
        ...

    async def aclose(self) -> None:
        """Release client resources."""
        ...
