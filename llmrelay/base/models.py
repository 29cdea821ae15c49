"""
Provider-agnostic domain models (DTOs) public surface.

Re-exports the one-class-per-file implementations under
``llmrelay.base.models_parts``.
"""

from .models_parts.message import ChatMessage, ContentPart, MessageContent, MessageKind, Role
from .models_parts.model_info import ModelInfo
from .models_parts.provider_config import ProviderConfig
from .models_parts.stream_callbacks import StreamCallbacks
from .models_parts.client_result import ClientResult

__all__ = [
    "ChatMessage",
    "ContentPart",
    "MessageContent",
    "MessageKind",
    "Role",
    "ModelInfo",
    "ProviderConfig",
    "StreamCallbacks",
    "ClientResult",
]
