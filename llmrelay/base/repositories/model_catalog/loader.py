"""Catalog file loader.

Reads a YAML (or JSON, which YAML parses too) catalog file into
:class:`ModelInfo` entries. Two document shapes are accepted:

.. code-block:: yaml

    # single provider
    provider: ollama
    endpoint: http://gpu-box:11434
    models:
      - id: qwen2.5-coder
        capabilities: {autocoding: true}

    # several providers
    providers:
      - provider: mistral
        models:
          - id: mistral-large-latest

A provider-level ``endpoint`` applies to every model in that block unless the
model sets its own.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ....config.env import canonical_provider
from ...models import ModelInfo


def _coerce_capabilities(raw: Any) -> Dict[str, Any]:
    """``dict`` passes through, ``None`` becomes ``{}``, a list of names becomes flags."""
    if isinstance(raw, dict):
        return raw
    if raw is None:
        return {}
    if isinstance(raw, list):
        return {str(flag): True for flag in raw}
    return {"raw_capabilities": raw}


def _models_from_block(block: Dict[str, Any], path: Path) -> List[ModelInfo]:
    provider = canonical_provider(str(block.get("provider") or path.stem))
    endpoint = block.get("endpoint")
    out: List[ModelInfo] = []
    for entry in block.get("models") or []:
        if isinstance(entry, str):
            entry = {"id": entry}
        if not isinstance(entry, dict) or not entry.get("id"):
            raise ValueError(f"Catalog file {path}: every model needs an 'id'")
        out.append(
            ModelInfo(
                id=str(entry["id"]),
                provider=canonical_provider(str(entry.get("provider") or provider)),
                name=entry.get("name") or str(entry["id"]),
                endpoint=entry.get("endpoint") or endpoint,
                capabilities=_coerce_capabilities(entry.get("capabilities")),
            )
        )
    return out


def load_catalog_file(path: Path) -> List[ModelInfo]:
    """Parse a catalog file into ``ModelInfo`` entries.

    Raises
    ------
    ValueError
        If the document root is not a mapping or a model lacks an id.
    """
    data: Any = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Catalog file {path} must contain a mapping at top level.")
    blocks = data.get("providers")
    if isinstance(blocks, list):
        models: List[ModelInfo] = []
        for block in blocks:
            if isinstance(block, dict):
                models.extend(_models_from_block(block, path))
        return models
    return _models_from_block(data, path)


__all__ = ["load_catalog_file"]
