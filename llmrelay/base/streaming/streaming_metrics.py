"""Streaming metrics data structures.

Isolated within the streaming package to keep the loop small.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streamed exchange.

    Attributes:
        emitted: Number of non-empty fragments delivered to ``on_token``.
        time_to_first_token_ms: Latency from loop start to the first fragment.
        total_duration_ms: Latency from loop start to the terminal outcome.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter, repr=False)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    def record_fragment(self) -> None:
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()
        self.emitted += 1

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()


__all__ = ["StreamMetrics"]
