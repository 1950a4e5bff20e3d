from __future__ import annotations

import pytest

from castor.errors import APIError, CastorError, ConfigurationError

pytestmark = pytest.mark.unit


def test_api_error_structured_metadata() -> None:
    err = APIError(
        "boom",
        hint="do this",
        status_code=502,
        provider="openai",
        phase="generate",
    )

    assert str(err) == "boom"
    assert err.hint == "do this"
    assert err.status_code == 502
    assert err.provider == "openai"
    assert err.phase == "generate"


def test_api_error_defaults_to_none() -> None:
    err = APIError("fail")
    assert err.hint is None
    assert err.status_code is None
    assert err.provider is None
    assert err.phase is None


def test_subclass_hierarchy() -> None:
    assert isinstance(APIError("x"), CastorError)
    assert isinstance(ConfigurationError("x"), CastorError)
    assert not isinstance(ConfigurationError("x"), APIError)
