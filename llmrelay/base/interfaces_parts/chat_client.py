"""ChatClient Protocol (single-class module).

The uniform streaming contract every provider adapter satisfies. The registry
and the orchestrator depend only on this Protocol.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatMessage, StreamCallbacks


@runtime_checkable
class ChatClient(Protocol):
    """Minimal interface for a streaming chat backend."""

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"anthropic"``."""
        ...

    @property
    def model(self) -> str:
        """Model identifier sent with every request."""
        ...

    def chat(
        self,
        messages: Sequence[ChatMessage],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> str:
        """Stream one exchange and return the accumulated text.

        Tokens are delivered through ``callbacks.on_token`` in backend order.
        ``on_complete`` fires once when the stream is exhausted and never when
        the exchange was cancelled; cancellation returns the partial text.
        Transport errors propagate unchanged.
        """
        ...

    def cancel(self, reason: Optional[str] = None) -> None:
        """Stop every exchange currently in flight on this client. Idempotent."""
        ...
