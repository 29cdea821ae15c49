"""Terminal logging for a streamed exchange.

Every exchange ends in exactly one of three outcomes and emits exactly one
normalized event for it:

- ``stream.end``: backend exhausted, ``on_complete`` delivered
- ``stream.cancelled``: cut short by cancellation, partial text returned
- ``chat.error``: transport failure while not cancelled, exception re-raised
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ErrorCode, classify_exception
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def _metric_fields(metrics: StreamMetrics) -> dict:
    return {
        "emitted_count": metrics.emitted,
        "time_to_first_token_ms": metrics.time_to_first_token_ms,
        "total_duration_ms": metrics.total_duration_ms,
    }


def log_stream_end(logger: logging.Logger, ctx: LogContext, metrics: StreamMetrics) -> None:
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        emitted=metrics.emitted > 0,
        **_metric_fields(metrics),
    )


def log_stream_cancelled(
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    reason: Optional[str] = None,
) -> None:
    normalized_log_event(
        logger,
        "stream.cancelled",
        ctx,
        phase="finalize",
        error_code=ErrorCode.CANCELLED.value,
        emitted=metrics.emitted > 0,
        reason=reason,
        **_metric_fields(metrics),
    )


def log_stream_error(
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    exc: BaseException,
    *,
    phase: str,
) -> ErrorCode:
    """Write ``chat.error`` for ``exc`` and return the classified code."""
    code = classify_exception(exc) if isinstance(exc, Exception) else ErrorCode.UNKNOWN
    normalized_log_event(
        logger,
        "chat.error",
        ctx,
        phase=phase,
        error_code=code.value,
        emitted=metrics.emitted > 0,
        level=logging.ERROR,
        error=str(exc)[:500],
        error_type=type(exc).__name__,
        **_metric_fields(metrics),
    )
    return code


__all__ = ["log_stream_end", "log_stream_cancelled", "log_stream_error"]
