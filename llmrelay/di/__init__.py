"""Composition root: the client registry and its default wiring."""
from __future__ import annotations

from .container import ClientRegistry, build_registry, cache_key

__all__ = ["ClientRegistry", "build_registry", "cache_key"]
