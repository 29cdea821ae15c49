"""
Outcome of ``ClientRegistry.create_client``.

Recoverable construction failures (missing credential, SDK rejection) are
returned rather than raised so the caller can surface ``message`` to the user.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..errors import ProviderError

if TYPE_CHECKING:
    from ..interfaces import ChatClient


@dataclass
class ClientResult:
    """Success flag plus either a client or an error.

    Attributes:
        success: True when ``client`` is usable.
        client: The cached or newly constructed adapter.
        message: User-facing message on failure (e.g. ``APIKey.openai.Missing``).
        error: Structured error on failure.
    """

    success: bool
    client: Optional["ChatClient"] = None
    message: Optional[str] = None
    error: Optional[ProviderError] = None

    @classmethod
    def ok(cls, client: "ChatClient") -> "ClientResult":
        return cls(success=True, client=client)

    @classmethod
    def failed(cls, error: ProviderError) -> "ClientResult":
        return cls(success=False, message=error.message, error=error)


__all__ = ["ClientResult"]
