"""Structured logging utilities shared by adapters, the registry and services.

All loggers hang off a single ``llmrelay`` base logger that writes one JSON
object per line to stderr. The level comes from ``LLMRELAY_LOG_LEVEL``.

``normalized_log_event`` is the diagnostic sink used for stream lifecycle and
failure events. It guarantees the canonical keys ``phase``, ``attempt``,
``error_code`` (omitted when ``None``), ``emitted`` and ``tokens`` so that
events from different providers can be filtered the same way.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "llmrelay"
LOG_LEVEL_ENV = "LLMRELAY_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_llmrelay_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_llmrelay_console_handler"
_FILE_HANDLER_ATTR = "_llmrelay_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a level name (case-insensitive) into a logging constant."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``llmrelay`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # pytest capture may close the stream the handler was bound to
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(json_mode, desired_level))
                continue
            existing.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(json_mode, desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``llmrelay`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so every event is written exactly once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(f"{BASE_LOGGER_NAME}."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or name; ``None`` keeps the current level.
    file_path:
        When set, attach (or retarget) a rotating file handler writing to this
        path. When ``None``, remove the managed file handler if present.
    json_mode:
        JSON formatter (default) or plain text.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_make_formatter(json_mode))
            h.setLevel(logger.level)
            return logger
        logger.removeHandler(h)
        with contextlib.suppress(Exception):
            h.close()
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_make_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a single structured event as a JSON message.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a JSON-friendly mapping (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    Extra fields are merged without clobbering the normalized values.
    ``error_code`` is dropped when ``None``; other required keys are kept even
    when their value is unknown.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is None:
        base_fields.pop("error_code")
    for k, v in extra_fields.items():
        if v is None:
            continue
        if k in base_fields and base_fields[k] is not None:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
