"""
Structured provider error exception types.

`ProviderError` carries a normalized `ErrorCode` together with the provider
and model it concerns. The three subclasses map one-to-one onto the failure
categories a caller of the client registry has to distinguish.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class MissingCredentialError(ProviderError):
    """No API key is available for a provider that requires one.

    Recoverable: the caller should prompt for a key and retry. ``message``
    holds the user-facing lookup token ``APIKey.<provider>.Missing``.
    """

    def __init__(self, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.MISSING_CREDENTIAL,
            message=f"APIKey.{provider}.Missing",
            provider=provider,
            model=model,
        )


class UnsupportedProviderError(ProviderError):
    """An unrecognized provider id was requested (configuration error)."""

    def __init__(self, provider: str, detail: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_PROVIDER,
            message=detail or f"Unsupported provider: {provider}",
            provider=provider,
        )


class ClientInitError(ProviderError):
    """Adapter construction failed (malformed config, SDK-level rejection)."""

    def __init__(self, provider: str, model: Optional[str], raw: Exception) -> None:
        super().__init__(
            code=ErrorCode.CLIENT_INIT_FAILED,
            message=f"Failed to initialize {provider} client: {raw}",
            provider=provider,
            model=model,
            raw=raw,
        )


__all__ = [
    "ProviderError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ClientInitError",
]
