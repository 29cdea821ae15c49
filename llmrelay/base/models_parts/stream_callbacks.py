"""
Callback pair delivered to ``chat()``.

``on_token`` fires zero or more times in backend emission order.
``on_complete`` fires at most once, after the last ``on_token``, and never
when the stream was cut short by cancellation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


def _ignore(_: str) -> None:
    return None


@dataclass
class StreamCallbacks:
    on_token: Callable[[str], None] = field(default=_ignore)
    on_complete: Callable[[str], None] = field(default=_ignore)


__all__ = ["StreamCallbacks"]
