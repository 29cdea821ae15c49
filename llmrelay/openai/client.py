"""OpenAIClient adapter.

Streams through ``client.chat.completions.create(..., stream=True)`` of the
``openai`` SDK. Messages are sent inline, system prompt included.

Reasoning models (ids starting with ``o1``) reject the ``system`` role and the
``max_tokens`` parameter, so for them system turns are sent as ``user`` and the
budget goes into ``max_completion_tokens``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

try:
    from openai import OpenAI  # type: ignore
except Exception:  # pragma: no cover
    OpenAI = None  # type: ignore

from ..base.adapter import BaseChatAdapter
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..config.defaults import OPENAI_DEFAULT_MODEL


def is_reasoning_model(model: str) -> bool:
    return model.startswith("o1")


class OpenAIClient(BaseChatAdapter):
    """Streaming adapter for OpenAI chat models."""

    provider_id = "openai"
    default_model = OPENAI_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        if OpenAI is None:
            raise RuntimeError("openai SDK not installed")
        kwargs: Dict[str, Any] = {"api_key": config.api_key}
        if config.endpoint:
            kwargs["base_url"] = config.endpoint
        self._client = OpenAI(**kwargs)

    def _convert(self, message: ChatMessage) -> Dict[str, Any]:
        role = message.role
        if role == "system" and is_reasoning_model(self._model):
            role = "user"
        content: Any = message.content
        if is_image_data_url(content):
            content = format_image_content("openai", content)
        return {"role": role, "content": content}

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        budget_key = "max_completion_tokens" if is_reasoning_model(self._model) else "max_tokens"
        return {
            "model": self._model,
            "messages": [self._convert(m) for m in messages],
            budget_key: self._config.max_tokens,
            "stream": True,
            "temperature": self._config.temperature,
        }

    def open_stream(self, request: Dict[str, Any]):
        return self._client.chat.completions.create(**request)

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        choices = getattr(chunk, "choices", None)
        if not choices:
            return None
        delta = getattr(choices[0], "delta", None)
        return getattr(delta, "content", None) or None


__all__ = ["OpenAIClient", "is_reasoning_model"]
