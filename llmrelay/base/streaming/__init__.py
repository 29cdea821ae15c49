"""Streaming package.

Exposes the shared stream loop, its metrics and terminal logging helpers.
"""

from .streaming_metrics import StreamMetrics
from .streaming_finalize import log_stream_cancelled, log_stream_end, log_stream_error
from .stream_loop import StreamOutcome, run_stream

__all__ = [
    "StreamMetrics",
    "StreamOutcome",
    "run_stream",
    "log_stream_end",
    "log_stream_cancelled",
    "log_stream_error",
]
