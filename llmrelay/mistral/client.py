"""MistralClient adapter.

Streams through ``Mistral.chat.stream`` of the ``mistralai`` SDK. Structured
content is JSON-encoded into a string since only text content is sent; a
stray image data URL becomes a "not supported" placeholder and messages marked
``kind="image"`` are dropped.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

try:
    from mistralai import Mistral  # type: ignore
except Exception:  # pragma: no cover
    Mistral = None  # type: ignore

from ..base.adapter import BaseChatAdapter
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..base.utils.messages import drop_image_messages
from ..config.defaults import MISTRAL_DEFAULT_MODEL


def _text_content(message: ChatMessage) -> str:
    if isinstance(message.content, str):
        if is_image_data_url(message.content):
            return format_image_content("mistral", message.content)  # type: ignore[return-value]
        return message.content
    return json.dumps(message.content, default=str)


class MistralClient(BaseChatAdapter):
    """Streaming adapter for Mistral models."""

    provider_id = "mistral"
    default_model = MISTRAL_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        if Mistral is None:
            raise RuntimeError("mistralai SDK not installed")
        kwargs: Dict[str, Any] = {"api_key": config.api_key}
        if config.endpoint:
            kwargs["server_url"] = config.endpoint
        self._client = Mistral(**kwargs)

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": m.role, "content": _text_content(m)} for m in drop_image_messages(messages)
            ],
            "temperature": self._config.temperature,
        }

    def open_stream(self, request: Dict[str, Any]):
        return self._client.chat.stream(**request)

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        data = getattr(chunk, "data", None)
        choices = getattr(data, "choices", None)
        if not choices:
            return None
        text = getattr(getattr(choices[0], "delta", None), "content", None)
        return text if isinstance(text, str) and text else None


__all__ = ["MistralClient"]
