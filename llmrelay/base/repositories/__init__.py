"""
Repositories package.

Exports:
- KeysRepository / KeyResolution: API key resolution and in-process storage
- ModelCatalog: model lookup by id
"""

from .keys import KeyResolution, KeysRepository
from .model_catalog import ModelCatalog

__all__ = [
    "KeysRepository",
    "KeyResolution",
    "ModelCatalog",
]
