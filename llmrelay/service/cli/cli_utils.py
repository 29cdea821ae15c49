# -*- coding: utf-8 -*-
"""Small helpers shared by the CLI subcommands.

- ``parse_verbosity(value)``: map user strings and synonyms to a level name.
- ``suppress_console_logs()``: detach console handlers while tokens stream to
  stdout so JSON log lines do not interleave with the reply.
- ``image_to_data_url(path)``: read a PNG/JPEG file into a base64 data URL.
- ``format_models(models, mode)``: render catalog entries as JSON or a table.
"""

from __future__ import annotations

import base64
import contextlib
import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from ...base.logging import BASE_LOGGER_NAME
from ...base.models import ModelInfo

_LEVEL_SYNONYMS = {
    "verbose": "DEBUG",
    "low": "INFO",
    "warn": "WARNING",
    "medium": "WARNING",
    "med": "WARNING",
    "err": "ERROR",
    "high": "ERROR",
    "quiet": "ERROR",
    "crit": "CRITICAL",
    "silent": "CRITICAL",
}


def parse_verbosity(value: str) -> Optional[str]:
    """Return the canonical upper-cased level for ``value`` or ``None``."""
    v = value.strip().lower()
    if v in _LEVEL_SYNONYMS:
        return _LEVEL_SYNONYMS[v]
    canon = v.upper()
    return canon if canon in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else None


@contextlib.contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Temporarily detach the console handlers of the shared logger.

    Managed file handlers stay attached. Handlers are restored on exit.
    """
    base = logging.getLogger(BASE_LOGGER_NAME)
    detached: List[logging.Handler] = []
    try:
        for handler in list(base.handlers):
            if getattr(handler, "_llmrelay_console_handler", False):
                handler.flush()
                base.removeHandler(handler)
                detached.append(handler)
        yield
    finally:
        for handler in detached:
            base.addHandler(handler)


_MEDIA_BY_SUFFIX = {".png": "image/png", ".jpg": "image/jpeg", ".jpeg": "image/jpeg"}


def image_to_data_url(path: str) -> str:
    """Encode a PNG or JPEG file as a ``data:`` URL.

    Raises:
        ValueError: For other file types.
    """
    p = Path(path)
    media = _MEDIA_BY_SUFFIX.get(p.suffix.lower())
    if media is None:
        raise ValueError(f"unsupported image type: {p.suffix or path}")
    encoded = base64.b64encode(p.read_bytes()).decode("ascii")
    return f"data:{media};base64,{encoded}"


def _rows(models: Iterable[ModelInfo]) -> List[Tuple[str, str, str]]:
    return [(m.provider, m.id, ",".join(sorted(k for k, v in m.capabilities.items() if v))) for m in models]


def format_models(models: Iterable[ModelInfo], *, mode: str = "table") -> str:
    """Render catalog entries; ``mode`` is ``"table"`` or ``"json"``."""
    models = list(models)
    if (mode or "table").strip().lower() == "json":
        return json.dumps([m.to_dict() for m in models], ensure_ascii=False, indent=2)
    rows = _rows(models)
    if not rows:
        return ""
    pw = max(len(r[0]) for r in rows)
    mw = max(len(r[1]) for r in rows)
    return "\n".join(f"{prov.ljust(pw)}  {mid.ljust(mw)}  {caps}".rstrip() for prov, mid, caps in rows)
