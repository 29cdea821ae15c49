"""ModelCatalog: the default ``ModelInfoSource``."""
from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ....config.env import canonical_provider
from ...logging import get_logger, log_event
from ...models import ModelInfo
from .builtin import BUILTIN_MODELS
from .loader import load_catalog_file

CATALOG_FILE_ENV = "LLMRELAY_MODEL_CATALOG"


class ModelCatalog:
    """In-memory model catalog keyed by model id.

    Built-in entries are loaded first; entries from ``catalog_file`` (or the
    file named by ``LLMRELAY_MODEL_CATALOG``) replace built-ins with the same
    id. Lookups are thread-safe.
    """

    def __init__(
        self,
        models: Optional[Iterable[ModelInfo]] = None,
        *,
        catalog_file: Optional[str] = None,
        include_builtin: bool = True,
    ) -> None:
        self._lock = threading.Lock()
        self._models: Dict[str, ModelInfo] = {}
        self._logger = get_logger("repositories.model_catalog")
        if include_builtin:
            for entry in BUILTIN_MODELS:
                self._put(ModelInfo.from_dict(entry))
        path = catalog_file or os.getenv(CATALOG_FILE_ENV)
        if path:
            self.load_file(Path(path))
        for info in models or ():
            self._put(info)

    def _put(self, info: ModelInfo) -> None:
        self._models[info.id] = info

    def load_file(self, path: Path) -> int:
        """Merge entries from a catalog file. Returns the number loaded."""
        loaded = load_catalog_file(path)
        with self._lock:
            for info in loaded:
                self._put(info)
        log_event(self._logger, "catalog.loaded", file=str(path), count=len(loaded))
        return len(loaded)

    def register(self, info: ModelInfo) -> None:
        with self._lock:
            self._put(info)

    def get_model_info(self, model_id: str) -> Optional[ModelInfo]:
        with self._lock:
            return self._models.get(model_id)

    def list_models(self, provider: Optional[str] = None) -> List[ModelInfo]:
        """Return entries sorted by provider then id, optionally filtered."""
        want = canonical_provider(provider) if provider else None
        with self._lock:
            items = list(self._models.values())
        if want:
            items = [m for m in items if m.provider == want]
        return sorted(items, key=lambda m: (m.provider, m.id))

    def providers(self) -> List[str]:
        with self._lock:
            return sorted({m.provider for m in self._models.values()})


__all__ = ["ModelCatalog", "CATALOG_FILE_ENV"]
