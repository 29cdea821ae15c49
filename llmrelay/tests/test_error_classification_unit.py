from __future__ import annotations

import types

from llmrelay.base.errors import (
    ClientInitError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
    classify_exception,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests
    assert classify_exception(MissingCredentialError("openai")) is ErrorCode.MISSING_CREDENTIAL  # nosec B101


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=429)
    assert classify_exception(e1) is ErrorCode.RATE_LIMIT  # nosec B101 - assert is appropriate in unit tests
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101 - assert is appropriate in unit tests
    # out-of-range values are ignored
    e3 = types.SimpleNamespace(status_code=999)
    assert classify_exception(e3) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_timeouts_and_heuristics():
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("Invalid API key provided")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(Exception("model does not exist")) is ErrorCode.NOT_FOUND  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_registry_error_messages():
    assert MissingCredentialError("cohere").message == "APIKey.cohere.Missing"  # nosec B101
    assert UnsupportedProviderError("acme").message == "Unsupported provider: acme"  # nosec B101
    init = ClientInitError("openai", "gpt-4o", ValueError("bad base url"))
    assert init.message == "Failed to initialize openai client: bad base url"  # nosec B101
    assert isinstance(init.raw, ValueError) and init.code is ErrorCode.CLIENT_INIT_FAILED  # nosec B101
