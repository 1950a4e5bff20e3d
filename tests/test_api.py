"""Real API integration tests.

These tests make real OpenAI calls and are intentionally compact:
- ENABLE_API_TESTS=1 is required to run any API tests
- OPENAI_API_KEY is required (OPENAI_API_BASE_URL is honored when set)
"""

from __future__ import annotations

import pytest

import castor

pytestmark = [pytest.mark.api, pytest.mark.slow]


@pytest.mark.asyncio
async def test_live_chat_with_search(openai_api_key: str, openai_test_model: str) -> None:
    config = castor.Config(api_key=openai_api_key)

    answer = await castor.chat(
        [castor.ChatMessage(role="user", content="Name one recent Python release.")],
        castor.ChatOptions(
            model=openai_test_model,
            max_tokens=256,
            search=True,
            search_location="America/Los_Angeles",
        ),
        config=config,
    )

    assert answer.strip()


@pytest.mark.asyncio
async def test_live_list_models(openai_api_key: str) -> None:
    models = await castor.list_models(config=castor.Config(api_key=openai_api_key))

    assert models
    assert models == sorted(models)
