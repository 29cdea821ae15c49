"""llmrelay package

One streaming chat surface over several model backends.

Public API (re-exported):
    - Version: ``__version__``
    - Messages and results: :class:`ChatMessage`, :class:`StreamCallbacks`,
      :class:`ClientResult`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Lifecycle: :class:`ClientRegistry`, :func:`build_registry`
    - Cancellation: :class:`CancellationToken`
    - Chat orchestration: :class:`ChatManager`

There is no process-wide registry. Callers build one, ask it for clients
and call ``reset()`` when they are done with it::

    registry = build_registry()
    result = registry.create_client("anthropic", "claude-3-5-sonnet-20241022")
    if result.success:
        text = result.client.chat([ChatMessage(role="user", content="hi")])
    registry.reset()
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    ClientInitError,
    ErrorCode,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from .base.models import ChatMessage, ClientResult, ModelInfo, ProviderConfig, StreamCallbacks
from .chat import ChatManager
from .di import ClientRegistry, build_registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatMessage",
    "StreamCallbacks",
    "ClientResult",
    "ModelInfo",
    "ProviderConfig",
    "ProviderError",
    "ErrorCode",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ClientInitError",
    "CancellationToken",
    "CancelledError",
    "ClientRegistry",
    "build_registry",
    "ChatManager",
]
