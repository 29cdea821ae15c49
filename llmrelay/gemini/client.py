"""GeminiClient adapter.

Uses the ``google-generativeai`` GenerativeModel chat API: every message but
the last becomes chat ``history`` and the last one is sent with
``send_message(parts, stream=True)``. Roles map ``assistant`` to ``model`` and
everything else to ``user``, so a system prompt travels as a leading user turn.

Messages marked ``kind="image"`` are dropped before conversion.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

try:
    import google.generativeai as genai  # type: ignore
except Exception:  # pragma: no cover
    genai = None  # type: ignore

from ..base.adapter import BaseChatAdapter
from ..base.models import ChatMessage, ProviderConfig
from ..base.utils.images import format_image_content, is_image_data_url
from ..base.utils.messages import drop_image_messages
from ..config.defaults import GEMINI_DEFAULT_MODEL


def _to_content(message: ChatMessage) -> Dict[str, Any]:
    if is_image_data_url(message.content):
        parts: Any = format_image_content("google", message.content)  # type: ignore[arg-type]
    elif isinstance(message.content, list):
        parts = message.content
    else:
        parts = [{"text": message.content}]
    return {"role": "model" if message.role == "assistant" else "user", "parts": parts}


class GeminiClient(BaseChatAdapter):
    """Streaming adapter for Gemini models."""

    provider_id = "google"
    default_model = GEMINI_DEFAULT_MODEL

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__(config)
        if genai is None:
            raise RuntimeError("google-generativeai SDK not installed")
        options = {"api_endpoint": config.endpoint} if config.endpoint else None
        genai.configure(api_key=config.api_key, client_options=options)

    def build_request(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        contents = [_to_content(m) for m in drop_image_messages(messages)]
        if not contents:
            raise ValueError("gemini chat requires at least one message")
        return {"history": contents[:-1], "parts": contents[-1]["parts"]}

    def open_stream(self, request: Dict[str, Any]):
        model = genai.GenerativeModel(self._model)
        session = model.start_chat(history=request["history"])
        return session.send_message(
            request["parts"],
            stream=True,
            generation_config={"temperature": self._config.temperature},
        )

    def translate_chunk(self, chunk: Any) -> Optional[str]:
        try:
            return chunk.text or None
        except ValueError:
            # Chunks without text parts (safety or finish markers) raise on .text
            return None


__all__ = ["GeminiClient"]
