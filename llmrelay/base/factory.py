"""Provider Factory.

Purpose
-------
Create adapter instances implementing ``ChatClient`` from a
:class:`ProviderConfig`. Adapters are imported lazily with ``importlib`` so
that vendor SDKs load only when their provider is first used.

External dependencies
---------------------
- Standard library only (``importlib``). Adapters depend on vendor SDKs.

Failure semantics
-----------------
- Unknown provider ids raise :class:`UnsupportedProviderError`.
- Import and constructor failures propagate unchanged; the client registry
  converts them into ``ClientInitError`` results.
- No retries, no timeouts.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple, Type

from ..config.env import canonical_provider
from .errors import UnsupportedProviderError
from .interfaces import ChatClient
from .models import ProviderConfig


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g. ``"openai"``)."""

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "anthropic": {"module": "llmrelay.anthropic.client", "class": "AnthropicClient"},
        "openai": {"module": "llmrelay.openai.client", "class": "OpenAIClient"},
        "google": {"module": "llmrelay.gemini.client", "class": "GeminiClient"},
        "cohere": {"module": "llmrelay.cohere.client", "class": "CohereClient"},
        "mistral": {"module": "llmrelay.mistral.client", "class": "MistralClient"},
        "ollama": {"module": "llmrelay.ollama.client", "class": "OllamaClient"},
    }

    @classmethod
    def is_supported(cls, provider: str) -> bool:
        return canonical_provider(provider) in cls._PROVIDERS

    @classmethod
    def adapter_class(cls, provider: str) -> Type:
        """Import and return the adapter class for ``provider``.

        Raises
        ------
        UnsupportedProviderError
            If the provider is not registered.
        ImportError, AttributeError
            If the adapter module or class cannot be loaded.
        """
        name = canonical_provider(provider)
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnsupportedProviderError(provider or "")
        mod = import_module(spec["module"])
        return getattr(mod, spec["class"])

    @classmethod
    def create(cls, config: ProviderConfig) -> ChatClient:
        """Construct the adapter for ``config.provider_id``.

        Constructor errors propagate unchanged.
        """
        klass = cls.adapter_class(config.provider_id)
        return klass(config)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory"]
