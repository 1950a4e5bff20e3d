"""Shared provider-side error helpers.

Providers map SDK exceptions into APIError so callers can handle one exception
type and still read the HTTP status and a remediation hint.
"""

from __future__ import annotations

import asyncio

import httpx

from castor.errors import APIError, _walk_exception_chain


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        response = getattr(e, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def _auth_hint(status_code: int | None, cause_message: str) -> str | None:
    """Generate a hint for auth errors where naming the env var is useful."""
    cause_lower = cause_message.lower()
    if status_code in {401, 403} or (
        status_code == 400 and ("api key" in cause_lower or "api_key" in cause_lower)
    ):
        return (
            "Check credentials/permissions "
            "(try setting OPENAI_API_KEY or Config.api_key)."
        )
    return None


def _network_hint(exc: BaseException) -> str | None:
    for e in _walk_exception_chain(exc):
        if isinstance(e, httpx.TimeoutException):
            return "The request timed out; check connectivity to api_base_url."
        if isinstance(e, httpx.RequestError):
            return "Could not reach the endpoint; check api_base_url."
    return None


def wrap_provider_error(
    exc: BaseException,
    *,
    provider: str,
    phase: str,
    message: str | None = None,
    hint: str | None = None,
) -> APIError:
    """Map provider SDK exceptions into APIError with stable metadata."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    # Already wrapped — fill in missing context only.
    if isinstance(exc, APIError):
        if exc.provider is None:
            exc.provider = provider
        if exc.phase is None:
            exc.phase = phase
        if hint is not None and exc.hint is None:
            exc.hint = hint
        return exc

    status_code = extract_status_code(exc)
    derived_hint = hint
    if derived_hint is None:
        derived_hint = _auth_hint(status_code, str(exc))
    if derived_hint is None and status_code is None:
        derived_hint = _network_hint(exc)

    msg = message or f"{provider} {phase} failed"
    status_note = f" (status={status_code})" if isinstance(status_code, int) else ""
    cause = str(exc)
    return APIError(
        f"{msg}{status_note}: {cause}" if cause else f"{msg}{status_note}",
        hint=derived_hint,
        status_code=status_code,
        provider=provider,
        phase=phase,
    )
