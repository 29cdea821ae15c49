"""AnthropicClient adapter.

Streams through the ``anthropic`` SDK Messages API
(``client.messages.create(..., stream=True)``).

Key behaviors:
* The first system message is hoisted into the ``system=`` field; the message
  array carries only user and assistant turns.
* Plain string content becomes a single text block; image data URLs become an
  image block plus a text prompt; structured content passes through.
* Only ``content_block_delta`` events whose delta is a ``text_delta`` carry text.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

try:
    import anthropic  # type: ignore
except Exception:  # pragma: no cover
    anthropic = None  # type: ignore

from ..base.adapter import BaseChatAdapter
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..base.utils.messages import split_system_message
from ..config.defaults import ANTHROPIC_DEFAULT_MODEL


def _content_blocks(message: ChatMessage) -> List[Any]:
    if is_image_data_url(message.content):
        return format_image_content("anthropic", message.content)  # type: ignore[return-value]
    if isinstance(message.content, list):
        return message.content
    return [{"type": "text", "text": message.content}]


class AnthropicClient(BaseChatAdapter):
    """Streaming adapter for Anthropic Claude models."""

    provider_id = "anthropic"
    default_model = ANTHROPIC_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        if anthropic is None:
            raise RuntimeError("anthropic SDK not installed")
        kwargs: Dict[str, Any] = {"api_key": config.api_key}
        if config.endpoint:
            kwargs["base_url"] = config.endpoint
        self._client = anthropic.Anthropic(**kwargs)

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        system, others = split_system_message(messages)
        params: Dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": m.role, "content": _content_blocks(m)} for m in others],
            "max_tokens": self._config.max_tokens,
            "stream": True,
            "temperature": self._config.temperature,
        }
        if system is not None:
            params["system"] = system
        return params

    def open_stream(self, request: Dict[str, Any]):
        return self._client.messages.create(**request)

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        if getattr(chunk, "type", None) != "content_block_delta":
            return None
        delta = getattr(chunk, "delta", None)
        if getattr(delta, "type", None) != "text_delta":
            return None
        return getattr(delta, "text", None) or None


__all__ = ["AnthropicClient"]
