"""HTTP transports for OpenAI-compatible gateways.

The GitHub Copilot gateway speaks the OpenAI wire format but rejects requests
that lack an ``X-GitHub-Api-Version`` header. The transports here wrap a
regular ``httpx`` transport and add that header to every outbound request.

Selection happens once, when the client is built, from the configured base URL
(see ``is_github_copilot_url``). Nothing is toggled per request.
"""

from __future__ import annotations

import httpx

COPILOT_HOST_MARKER = "api.githubcopilot.com"
GITHUB_API_VERSION_HEADER = "X-GitHub-Api-Version"
GITHUB_API_VERSION = "2023-05-01"


def is_github_copilot_url(url: str) -> bool:
    """Return True when *url* points at the GitHub Copilot gateway.

    Plain case-insensitive substring check; the value is never parsed, so any
    string (including an empty or malformed one) is accepted.
    """
    return COPILOT_HOST_MARKER in url.lower()


def _with_version_header(request: httpx.Request) -> httpx.Request:
    """Return a copy of *request* carrying the GitHub API version header.

    The body stream and extensions are shared with the original; headers are
    copied so the caller's request is left untouched.
    """
    headers = request.headers.copy()
    headers[GITHUB_API_VERSION_HEADER] = GITHUB_API_VERSION
    return httpx.Request(
        request.method,
        request.url,
        headers=headers,
        stream=request.stream,
        extensions=dict(request.extensions),
    )


class CopilotTransport(httpx.BaseTransport):
    """Sync transport that injects the GitHub API version header."""

    def __init__(self, wrapped: httpx.BaseTransport | None = None) -> None:
        """Wrap *wrapped*, or a default ``httpx.HTTPTransport`` when None."""
        self.wrapped = wrapped if wrapped is not None else httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self.wrapped.handle_request(_with_version_header(request))

    def close(self) -> None:
        self.wrapped.close()


class AsyncCopilotTransport(httpx.AsyncBaseTransport):
    """Async transport that injects the GitHub API version header."""

    def __init__(self, wrapped: httpx.AsyncBaseTransport | None = None) -> None:
        """Wrap *wrapped*, or a default ``httpx.AsyncHTTPTransport`` when None."""
        self.wrapped = wrapped if wrapped is not None else httpx.AsyncHTTPTransport()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self.wrapped.handle_async_request(_with_version_header(request))

    async def aclose(self) -> None:
        await self.wrapped.aclose()
