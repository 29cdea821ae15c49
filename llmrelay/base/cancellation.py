"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is created fresh for every ``chat()`` call and polled by
the stream loop after each chunk. ``CancelledError`` is how the loop unwinds
when the token trips; adapters translate it into a normal partial return.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
