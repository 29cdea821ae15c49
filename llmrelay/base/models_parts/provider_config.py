"""
ProviderConfig: the immutable settings an adapter is constructed from.

Built once per client construction by the registry. Changing any field means
discarding the cached adapter and building a new one.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` (frozen) for validation and immutability.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE


class ProviderConfig(BaseModel):
    """Construction parameters for one adapter instance.

    Attributes
    ----------
    provider_id:
        Canonical provider name (``"anthropic"``, ``"openai"``, ...).
    model_id:
        Model identifier; ``None`` lets the adapter use its default model.
    api_key:
        Resolved credential; ``None`` for credential-free backends.
    endpoint:
        Optional base URL override for proxies or self-hosted gateways.
    temperature:
        Sampling temperature sent with every request.
    max_tokens:
        Completion budget for backends that require one.
    timeout_seconds:
        Optional read timeout for HTTP transports that accept one.
    """

    model_config = ConfigDict(frozen=True)

    provider_id: str
    model_id: Optional[str] = None
    api_key: Optional[str] = Field(default=None, repr=False)
    endpoint: Optional[str] = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    timeout_seconds: Optional[float] = None


__all__ = ["ProviderConfig"]
