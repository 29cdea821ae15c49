"""Interfaces (Protocols) split into single-class modules.

``llmrelay.base.interfaces`` re-exports these as the stable import path.
"""

from .chat_client import ChatClient
from .credential_provider import CredentialProvider
from .model_info_source import ModelInfoSource

__all__ = [
    "ChatClient",
    "CredentialProvider",
    "ModelInfoSource",
]
