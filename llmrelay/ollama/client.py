"""OllamaClient adapter.

Talks to a local Ollama daemon over HTTP (``httpx``); no SDK and no API key.
``POST /api/chat`` with ``stream: true`` returns NDJSON, one object per line:
``{"message": {"role": "assistant", "content": "..."}, "done": false}``.
A line carrying ``error`` aborts the stream with :class:`OllamaStreamError`.

Image data URLs degrade to the generic ``"[Image]"`` placeholder.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional

from ..base.adapter import BaseChatAdapter
from ..base.http import get_httpx_client
from ..base.logging import normalized_log_event, LogContext
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..config.defaults import OLLAMA_DEFAULT_HOST, OLLAMA_DEFAULT_MODEL


class OllamaStreamError(RuntimeError):
    """The daemon reported an error inside the NDJSON stream."""


class OllamaClient(BaseChatAdapter):
    """Streaming adapter for models served by Ollama."""

    provider_id = "ollama"
    default_model = OLLAMA_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        self._host = (config.endpoint or OLLAMA_DEFAULT_HOST).rstrip("/")
        self._http = get_httpx_client(self._host, purpose="ollama.chat", timeout=config.timeout_seconds)

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        converted = []
        for m in messages:
            content: Any = m.content
            if is_image_data_url(content):
                content = format_image_content("ollama", content)
            elif isinstance(content, list):
                content = m.text_or_joined()
            converted.append({"role": m.role, "content": content})
        return {
            "model": self._model,
            "messages": converted,
            "stream": True,
            "options": {"temperature": self._config.temperature},
        }

    def open_stream(self, request: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        with self._http.stream("POST", "/api/chat", json=request) as resp:
            resp.raise_for_status()
            for line in resp.iter_lines():
                if not line:
                    continue
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError as e:
                    normalized_log_event(
                        self._logger,
                        "stream.decode_error",
                        LogContext(provider=self.provider_id, model=self._model),
                        phase="mid_stream",
                        error=str(e),
                        line=line[:200],
                    )
                    continue
                if isinstance(obj, dict) and obj.get("error"):
                    raise OllamaStreamError(str(obj["error"]))
                yield obj

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        if not isinstance(chunk, dict) or chunk.get("done") is True:
            return None
        message = chunk.get("message") or {}
        return message.get("content") or None


__all__ = ["OllamaClient", "OllamaStreamError"]
