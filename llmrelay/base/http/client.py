"""Shared HTTP client pool for adapters that speak plain HTTP.

Clients are cached by ``(base_url, purpose, timeout)`` so adapters for the
same host reuse one connection pool. All clients are closed at interpreter
exit; tests may call :func:`close_all_clients` explicitly.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.
"""

from __future__ import annotations

import atexit
import threading
from contextlib import suppress
from typing import Dict, Optional, Tuple

import httpx

_CLIENTS: Dict[Tuple[Optional[str], str, Optional[float]], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str, *, timeout: Optional[float] = None) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Base URL set on the client so callers can use relative paths.
        purpose: Short discriminator for separate pools (e.g. "ollama.chat").
        timeout: Read timeout in seconds; ``None`` disables it, which suits
            long-running streams.

    Thread-safety:
        Per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose, timeout)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            with suppress(Exception):  # nosec B110 - shutdown path
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
