"""The shared streaming control flow.

``run_stream`` drives one exchange for every adapter: open the backend stream,
translate each native chunk to a text fragment, poll the cancellation token
after every chunk, then settle on exactly one outcome (complete, cancelled or
error). Adapters only supply ``starter`` and ``translator``.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack, suppress
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..cancellation import CancellationToken, CancelledError
from ..logging import LogContext, normalized_log_event
from .streaming_finalize import log_stream_cancelled, log_stream_end, log_stream_error
from .streaming_metrics import StreamMetrics


@dataclass
class StreamOutcome:
    """Result of one ``run_stream`` call.

    ``completed`` is True only when the backend stream was exhausted without
    cancellation; ``on_complete`` has then already been invoked.
    """

    text: str
    completed: bool
    metrics: StreamMetrics


def _register_stream_cleanup(stream: Any, stack: ExitStack) -> None:
    """Close the native stream on exit when it exposes ``close()``."""
    close_fn = getattr(stream, "close", None)
    if callable(close_fn):
        def _safe_close() -> None:
            with suppress(Exception):
                close_fn()
        stack.callback(_safe_close)


def run_stream(
    *,
    starter: Callable[[], Iterable[Any]],
    translator: Callable[[Any], Optional[str]],
    token: CancellationToken,
    on_token: Callable[[str], None],
    on_complete: Callable[[str], None],
    logger: logging.Logger,
    ctx: LogContext,
) -> StreamOutcome:
    """Run one streamed exchange.

    Raises
    ------
    Exception
        Whatever ``starter`` or the stream raised, unchanged, when the token
        was not cancelled at the time. A ``chat.error`` event is logged first.
    """
    metrics = StreamMetrics()
    parts: list = []
    normalized_log_event(logger, "stream.start", ctx, phase="start", emitted=False)

    def _cancelled() -> StreamOutcome:
        metrics.finish()
        log_stream_cancelled(logger, ctx, metrics, token.reason)
        return StreamOutcome(text="".join(parts), completed=False, metrics=metrics)

    phase = "start"
    with ExitStack() as stack:
        try:
            stream = starter()
            _register_stream_cleanup(stream, stack)
            phase = "stream"
            for chunk in stream:
                token.raise_if_cancelled()
                fragment = translator(chunk)
                if fragment:
                    parts.append(fragment)
                    metrics.record_fragment()
                    on_token(fragment)
            token.raise_if_cancelled()
        except CancelledError:
            return _cancelled()
        except Exception as exc:
            if token.cancelled:
                return _cancelled()
            metrics.finish()
            log_stream_error(logger, ctx, metrics, exc, phase=phase)
            raise

    full_text = "".join(parts)
    metrics.finish()
    log_stream_end(logger, ctx, metrics)
    on_complete(full_text)
    return StreamOutcome(text=full_text, completed=True, metrics=metrics)


__all__ = ["StreamOutcome", "run_stream"]
