"""
ModelInfo DTO returned by the model registry.

The registry consults it to route client construction (provider and endpoint)
and the orchestrator consults its capability flags to pick a system prompt.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class ModelInfo:
    """A single model catalog entry.

    Attributes:
        id: Stable model identifier sent to the backend.
        provider: Provider key owning this model (e.g. ``"anthropic"``).
        name: Human-friendly display name.
        endpoint: Optional base URL override for the backend transport.
        capabilities: Capability flags (``vision``, ``tools``, ``autocoding``).
    """

    id: str
    provider: str
    name: Optional[str] = None
    endpoint: Optional[str] = None
    capabilities: Dict[str, Any] = field(default_factory=dict)

    def supports(self, capability: str) -> bool:
        """Return True when the capability flag is set and truthy."""
        return bool(self.capabilities.get(capability))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], provider: Optional[str] = None) -> "ModelInfo":
        return cls(
            id=str(data["id"]),
            provider=str(data.get("provider") or provider or ""),
            name=data.get("name"),
            endpoint=data.get("endpoint"),
            capabilities=dict(data.get("capabilities") or {}),
        )


__all__ = [
    "ModelInfo",
]
