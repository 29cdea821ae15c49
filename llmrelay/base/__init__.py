"""
Relay base package.

Provider-agnostic pieces every adapter builds on:
- Interfaces: the ``ChatClient`` contract and its collaborators
- Models (DTOs): messages, model metadata, provider config, results
- Repositories: key resolution and the model catalog
- Factory: lazy creation of adapters by canonical provider name
- Streaming: the shared stream loop, cancellation and metrics
"""

from .adapter import BaseChatAdapter
from .cancellation import CancellationToken, CancelledError
from .factory import ProviderFactory
from .interfaces import ChatClient, CredentialProvider, ModelInfoSource
from .models import ChatMessage, ClientResult, ModelInfo, ProviderConfig, StreamCallbacks
from .repositories import KeyResolution, KeysRepository, ModelCatalog
from .streaming import StreamMetrics, StreamOutcome, run_stream

__all__ = [
    # Models
    "ChatMessage",
    "ModelInfo",
    "ProviderConfig",
    "StreamCallbacks",
    "ClientResult",
    # Interfaces
    "ChatClient",
    "CredentialProvider",
    "ModelInfoSource",
    # Repositories
    "KeysRepository",
    "KeyResolution",
    "ModelCatalog",
    # Factory and adapters
    "ProviderFactory",
    "BaseChatAdapter",
    # Cancellation and streaming
    "CancellationToken",
    "CancelledError",
    "StreamMetrics",
    "StreamOutcome",
    "run_stream",
]
