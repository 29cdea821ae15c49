"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings across adapters, the
normalizer and the orchestrator.
"""
from __future__ import annotations

# Content starting with this prefix is bookkeeping, never sent to a backend.
DIAGNOSTIC_PREFIX = "Mode."

# Tag placed on assistant replies appended by the orchestrator.
CHAT_RESPONSE_TAG = "Mode.ChatResponse"

# Image degradation
IMAGE_PLACEHOLDER = "[Image]"
IMAGE_UNSUPPORTED_TEMPLATE = "[Image input not supported for {provider}]"
IMAGE_DESCRIBE_PROMPT = "Describe this image."
IMAGE_INLINE_PREFIX = "Here's an image: "

# Providers constructed without an API key.
CREDENTIAL_FREE_PROVIDERS = frozenset({"ollama"})

__all__ = [
    "DIAGNOSTIC_PREFIX",
    "CHAT_RESPONSE_TAG",
    "IMAGE_PLACEHOLDER",
    "IMAGE_UNSUPPORTED_TEMPLATE",
    "IMAGE_DESCRIBE_PROMPT",
    "IMAGE_INLINE_PREFIX",
    "CREDENTIAL_FREE_PROVIDERS",
]
