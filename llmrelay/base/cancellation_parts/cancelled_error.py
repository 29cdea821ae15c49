"""Cancellation signal raised inside the stream loop."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream observes its cancellation token.

    Internal to the stream loop: it is caught there and converted into a
    normal return of the partial text. Cancellation is never surfaced to
    ``chat()`` callers as an exception.
    """


__all__ = ["CancelledError"]
