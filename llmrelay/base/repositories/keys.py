"""
Keys Repository

Purpose
- Centralize API key resolution for providers.
- Hold keys supplied at runtime (CLI flag, HTTP ``/api/keys``) in-process.
- Notify subscribers when a stored key changes so cached clients can be
  discarded.

Design
- Non-throwing accessors that return None if a key is not resolved.
- Priority order: in-process store, environment variables, external config file.
- Nothing is written outside the process.

Usage
- repo = KeysRepository()
- key = repo.get_api_key("openai")
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...config import load_config_file
from ...config.env import canonical_provider, is_placeholder, resolve_provider_key

KeyChangeListener = Callable[[str], None]


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "memory", "env", "config", "none"
    extra: Dict[str, Any] = field(default_factory=dict)


class KeysRepository:
    """
    Resolve provider credentials with a strict priority order:

    1) Keys stored in-process via ``set_api_key``
    2) Environment variables (alias-aware)
    3) External config file section ``<provider>.api_key``
    4) None

    Satisfies the ``CredentialProvider`` protocol.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._lock = threading.Lock()
        self._store: Dict[str, str] = {
            canonical_provider(k): v for k, v in (initial or {}).items() if v
        }
        self._listeners: List[KeyChangeListener] = []

    def get_api_key(self, provider: str) -> Optional[str]:
        return self.get_resolution(provider).api_key

    def get_resolution(self, provider: str) -> KeyResolution:
        p = canonical_provider(provider)
        with self._lock:
            stored = self._store.get(p)
        if stored:
            return KeyResolution(provider=p, api_key=stored, source="memory")

        val, used = resolve_provider_key(p)
        if val:
            return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": used})

        cfg_key, extra = self._from_config(p)
        if cfg_key:
            return KeyResolution(provider=p, api_key=cfg_key, source="config", extra=extra)
        return KeyResolution(provider=p, api_key=None, source="none", extra=extra)

    # -------------------- mutation --------------------

    def set_api_key(self, provider: str, api_key: str) -> None:
        """Store a key in-process and notify listeners.

        Raises:
            ValueError: If ``api_key`` is empty.
        """
        if not api_key:
            raise ValueError("api_key must be non-empty")
        p = canonical_provider(provider)
        with self._lock:
            self._store[p] = api_key
        self._notify(p)

    def delete_api_key(self, provider: str) -> bool:
        """Remove an in-process key. Returns True when one was present."""
        p = canonical_provider(provider)
        with self._lock:
            existed = self._store.pop(p, None) is not None
        self._notify(p)
        return existed

    def add_listener(self, listener: KeyChangeListener) -> None:
        """Subscribe ``listener(provider)`` to key changes."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: KeyChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, provider: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(provider)

    # -------------------- internal helpers --------------------

    def _from_config(self, provider: str) -> Tuple[Optional[str], Dict[str, Any]]:
        """Read the key from the external config file. Returns (key_or_none, meta)."""
        meta: Dict[str, Any] = {}
        prov_cfg = load_config_file().get(provider)
        meta["has_provider_section"] = isinstance(prov_cfg, dict)
        if not isinstance(prov_cfg, dict):
            return None, meta
        return self._extract_field_from_provider_cfg(prov_cfg, meta), meta

    @staticmethod
    def _extract_field_from_provider_cfg(
        prov_cfg: Dict[str, Any], meta: Dict[str, Any]
    ) -> Optional[str]:
        """Return the first non-placeholder value among ``api_key``, ``key``, ``token``.

        The matching field name is recorded in ``meta["field"]``.
        """
        for name in ("api_key", "key", "token"):
            val = prov_cfg.get(name)
            if isinstance(val, str) and val and not is_placeholder(val):
                meta["field"] = name
                return val
        return None


__all__ = ["KeyResolution", "KeysRepository", "KeyChangeListener"]
