"""Models parts package public surface.

Re-exports individual DTOs; ``llmrelay.base.models`` remains the primary
import path.
"""

from .message import ChatMessage, ContentPart, MessageContent, MessageKind, Role
from .model_info import ModelInfo
from .provider_config import ProviderConfig
from .stream_callbacks import StreamCallbacks
from .client_result import ClientResult

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
