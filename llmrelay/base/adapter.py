"""BaseChatAdapter: the control flow every provider adapter shares.

Subclasses implement three hooks:

* ``build_request(messages)`` shapes the filtered history for the backend
* ``open_stream(request)`` starts the SDK stream and returns an iterable
* ``translate_chunk(chunk)`` extracts the text fragment from one native chunk

Everything else (diagnostic filtering, per-call cancellation, accumulation,
callback ordering, error logging) lives here and in ``streaming.run_stream``.
"""
from __future__ import annotations

import threading
from typing import Any, Iterable, List, Optional, Sequence, Set

from .cancellation import CancellationToken
from .logging import LogContext, get_logger
from .models import ChatMessage, ProviderConfig, StreamCallbacks
from .streaming import run_stream
from .utils.messages import filter_diagnostic_messages


class BaseChatAdapter:
    """Template for streaming chat adapters.

    Instances are shared through the client registry, so ``chat`` may run
    concurrently on several threads. Each call gets its own cancellation
    token; ``cancel`` trips every token currently in flight.
    """

    provider_id: str = "base"
    default_model: str = ""

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config
        self._model = config.model_id or self.default_model
        self._logger = get_logger(f"providers.{self.provider_id}")
        self._inflight_lock = threading.Lock()
        self._inflight: Set[CancellationToken] = set()

    @property
    def provider_name(self) -> str:
        return self.provider_id

    @property
    def model(self) -> str:
        return self._model

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ---- subclass hooks ----
    def build_request(self, messages: List[ChatMessage]) -> Any:  # pragma: no cover - interface
        raise NotImplementedError

    def open_stream(self, request: Any) -> Iterable[Any]:  # pragma: no cover - interface
        raise NotImplementedError

    def translate_chunk(self, chunk: Any) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    # ---- contract ----
    def chat(
        self,
        messages: Sequence[ChatMessage],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> str:
        """Stream one exchange and return the accumulated text.

        ``on_complete`` is invoked once on normal exhaustion and never after
        cancellation, in which case the partial text is returned. Transport
        errors raised while not cancelled are logged as ``chat.error`` and
        re-raised unchanged.
        """
        cbs = callbacks if callbacks is not None else StreamCallbacks()
        filtered = filter_diagnostic_messages(messages)
        token = CancellationToken()
        if cancellation_token is not None:
            cancellation_token.link_child(token)
        with self._inflight_lock:
            self._inflight.add(token)
        ctx = LogContext(provider=self.provider_id, model=self._model)
        try:
            outcome = run_stream(
                starter=lambda: self.open_stream(self.build_request(filtered)),
                translator=self.translate_chunk,
                token=token,
                on_token=cbs.on_token,
                on_complete=cbs.on_complete,
                logger=self._logger,
                ctx=ctx,
            )
        finally:
            with self._inflight_lock:
                self._inflight.discard(token)
            if cancellation_token is not None:
                cancellation_token.unlink_child(token)
        return outcome.text

    def cancel(self, reason: Optional[str] = None) -> None:
        """Stop every exchange currently in flight on this adapter. Idempotent.

        Exchanges started afterwards are unaffected.
        """
        with self._inflight_lock:
            tokens = list(self._inflight)
        for token in tokens:
            token.cancel(reason or "cancelled by client")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(provider={self.provider_id!r}, model={self._model!r})"


__all__ = ["BaseChatAdapter"]
