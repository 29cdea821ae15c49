"""ModelInfoSource Protocol (single-class module)."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..models import ModelInfo


@runtime_checkable
class ModelInfoSource(Protocol):
    """Model registry lookup used to route client construction."""

    def get_model_info(self, model_id: str) -> Optional[ModelInfo]:
        """Return catalog metadata for ``model_id`` or ``None`` when unknown."""
        ...
