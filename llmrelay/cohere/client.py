"""CohereClient adapter.

Streams through ``cohere.ClientV2.chat_stream``. Only ``content-delta`` events
carry text, at ``event.delta.message.content.text``.

Messages marked ``kind="image"`` are dropped; a stray image data URL is
replaced with a "not supported" placeholder.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

try:
    import cohere  # type: ignore
except Exception:  # pragma: no cover
    cohere = None  # type: ignore

from ..base.adapter import BaseChatAdapter
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..base.utils.messages import drop_image_messages
from ..config.defaults import COHERE_DEFAULT_MODEL


class CohereClient(BaseChatAdapter):
    """Streaming adapter for Cohere Command models."""

    provider_id = "cohere"
    default_model = COHERE_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        if cohere is None:
            raise RuntimeError("cohere SDK not installed")
        kwargs: Dict[str, Any] = {"api_key": config.api_key}
        if config.endpoint:
            kwargs["base_url"] = config.endpoint
        self._client = cohere.ClientV2(**kwargs)

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        converted = []
        for m in drop_image_messages(messages):
            content = format_image_content("cohere", m.content) if is_image_data_url(m.content) else m.content  # type: ignore[arg-type]
            converted.append({"role": m.role, "content": content})
        return {
            "model": self._model,
            "messages": converted,
            "temperature": self._config.temperature,
        }

    def open_stream(self, request: Dict[str, Any]):
        return self._client.chat_stream(**request)

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        if getattr(chunk, "type", None) != "content-delta":
            return None
        message = getattr(getattr(chunk, "delta", None), "message", None)
        content = getattr(message, "content", None)
        return getattr(content, "text", None) or None


__all__ = ["CohereClient"]
