"""Cooperative cancellation token implementation.

A ``CancellationToken`` is scoped to a single in-flight stream. The stream
loop polls it after every chunk; an external stop request flips it. Tokens may
be linked so that cancelling a caller-owned token also stops the per-call
token an adapter derives from it.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation flag with optional cascading to children.

    Thread-safe: ``cancel`` may be called from any thread while the owning
    stream polls ``cancelled`` or ``raise_if_cancelled`` on its own thread.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation and cascade to linked children. Idempotent."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link ``token`` so this token's cancellation cascades to it.

        A child linked after this token was cancelled is cancelled at once.
        """
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Detach a previously linked child (no-op when not linked)."""
        with self._lock:
            if token in self._children:
                self._children.remove(token)

    def child(self) -> "CancellationToken":
        """Create and link a child token."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "stream cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
