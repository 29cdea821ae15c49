"""CredentialProvider Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialProvider(Protocol):
    """Source of API keys, looked up per provider id."""

    def get_api_key(self, provider: str) -> Optional[str]:
        """Return the key for ``provider`` or ``None`` when absent."""
        ...
