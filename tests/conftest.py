"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and automatic API test
skipping. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
from typing import TYPE_CHECKING

import pytest

from castor.providers.models import ProviderResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from castor.options import ChatOptions
    from castor.providers.models import ChatMessage

OPENAI_MODEL = "gpt-4o"
COPILOT_BASE_URL = "https://api.githubcopilot.com"

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeProvider:
    """Provider test double for public API behavior verification.

    Captures calls and returns a configurable response. Use to test chat()
    and list_models() without making real API calls.
    """

    response: ProviderResponse = field(
        default_factory=lambda: ProviderResponse(text="ok")
    )
    models: list[str] = field(default_factory=list)
    raw_models: tuple[str, ...] = ()
    error: BaseException | None = None
    close_error: BaseException | None = None
    generate_calls: list[tuple[list[ChatMessage], ChatOptions]] = field(
        default_factory=list
    )
    closed: bool = False

    def needs_raw_mode(self, model: str) -> bool:
        return model in self.raw_models

    async def generate(
        self, messages: Sequence[ChatMessage], options: ChatOptions
    ) -> ProviderResponse:
        self.generate_calls.append((list(messages), options))
        if self.error is not None:
            raise self.error
        return self.response

    async def list_models(self) -> list[str]:
        if self.error is not None:
            raise self.error
        return sorted(self.models)

    async def aclose(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    monkeypatch.setattr("castor.config.load_dotenv", lambda *_args, **_kwargs: False)


@pytest.fixture(autouse=True)
def isolate_provider_env(request, monkeypatch):
    """Ensure a clean provider environment for each test.

    Clears OPENAI_* env vars to prevent test pollution.
    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("OPENAI_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


# =============================================================================
# Shared Fixtures
# =============================================================================

# gpt-4o-mini supports the hosted web search tool and is cheap enough for CI.
_OPENAI_TEST_MODEL = "gpt-4o-mini"


@pytest.fixture
def openai_api_key():
    """Return OPENAI_API_KEY or skip the test if unavailable."""
    key = os.getenv("OPENAI_API_KEY")
    if not key:
        pytest.skip("OPENAI_API_KEY not set")
    return key


@pytest.fixture
def openai_test_model():
    """Return the model to use for OpenAI API tests."""
    return _OPENAI_TEST_MODEL


@pytest.fixture
def fake_provider(monkeypatch) -> FakeProvider:
    """Route castor.chat()/list_models() to a FakeProvider (not autouse)."""
    provider = FakeProvider()
    monkeypatch.setattr("castor._get_provider", lambda _config: provider)
    return provider
