"""Shared fakes for adapter, registry and orchestrator tests."""

from __future__ import annotations

import threading
import time
from types import SimpleNamespace
from typing import Any, Callable, Iterable, List, Optional

from llmrelay.base.adapter import BaseChatAdapter
from llmrelay.base.models import ChatMessage, ProviderConfig


def ns(**kwargs: Any) -> SimpleNamespace:
    return SimpleNamespace(**kwargs)


def user(text: str) -> ChatMessage:
    return ChatMessage(role="user", content=text)


class ScriptedAdapter(BaseChatAdapter):
    """Adapter whose stream yields ``chunks`` verbatim, then optionally raises.

    ``before_chunk(i)`` runs before chunk ``i`` is yielded, which lets tests
    cancel or fail at a precise position.
    """

    provider_id = "fake"
    default_model = "fake-1"

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        chunks: Iterable[Any] = (),
        error: Optional[Exception] = None,
        start_error: Optional[Exception] = None,
        before_chunk: Optional[Callable[[int], None]] = None,
    ) -> None:
        super().__init__(config or ProviderConfig(provider_id="fake"))
        self.chunks = list(chunks)
        self.error = error
        self.start_error = start_error
        self.before_chunk = before_chunk
        self.requests: List[List[ChatMessage]] = []

    def build_request(self, messages: List[ChatMessage]) -> List[ChatMessage]:
        self.requests.append(list(messages))
        return messages

    def open_stream(self, request: Any):
        if self.start_error is not None:
            raise self.start_error
        return self._iterate()

    def _iterate(self):
        for i, chunk in enumerate(self.chunks):
            if self.before_chunk is not None:
                self.before_chunk(i)
            yield chunk
        if self.error is not None:
            raise self.error

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        return chunk


class FakeFactory:
    """Stand-in for ``ProviderFactory`` recording every construction."""

    supported = frozenset({"anthropic", "openai", "google", "cohere", "mistral", "ollama"})

    def __init__(self, *, fail: Optional[Exception] = None, delay: float = 0.0, chunks: Iterable[Any] = ("ok",)) -> None:
        self.fail = fail
        self.delay = delay
        self.chunks = list(chunks)
        self.configs: List[ProviderConfig] = []
        self._lock = threading.Lock()

    def is_supported(self, provider: str) -> bool:
        return provider in self.supported

    def create(self, config: ProviderConfig) -> ScriptedAdapter:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.configs.append(config)
        if self.fail is not None:
            raise self.fail
        adapter = ScriptedAdapter(config, chunks=self.chunks)
        adapter.provider_id = config.provider_id
        return adapter
