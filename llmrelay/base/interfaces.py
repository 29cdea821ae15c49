"""
Provider-agnostic interfaces (Protocols) for the llmrelay core.

Re-exports the single-class modules under ``llmrelay.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ChatClient, CredentialProvider, ModelInfoSource

__all__ = [
    "ChatClient",
    "CredentialProvider",
    "ModelInfoSource",
]
