"""Message normalization helpers shared across providers.

Helpers here are side-effect free: they return new lists and never mutate
the messages they are given. Conversation order is always preserved.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import DIAGNOSTIC_PREFIX
from ..models import ChatMessage
from ..models_parts.message import part_field


def is_diagnostic(message: ChatMessage) -> bool:
    """True when the message is bookkeeping rather than conversation.

    String content qualifies when it starts with the diagnostic prefix.
    Structured content qualifies when any string item, or any ``text`` part's
    text, starts with it. Non-text parts never qualify.
    """
    content = message.content
    if isinstance(content, str):
        return content.startswith(DIAGNOSTIC_PREFIX)
    for item in content:
        if isinstance(item, str):
            if item.startswith(DIAGNOSTIC_PREFIX):
                return True
        elif part_field(item, "type") == "text" and str(part_field(item, "text") or "").startswith(DIAGNOSTIC_PREFIX):
            return True
    return False


def filter_diagnostic_messages(messages: Iterable[ChatMessage]) -> List[ChatMessage]:
    """Drop diagnostic messages, keeping the rest in order."""
    return [m for m in messages if not is_diagnostic(m)]


def drop_image_messages(messages: Iterable[ChatMessage]) -> List[ChatMessage]:
    """Drop messages marked ``kind="image"``."""
    return [m for m in messages if m.kind != "image"]


def split_system_message(
    messages: Sequence[ChatMessage],
) -> Tuple[Optional[str], List[ChatMessage]]:
    """Separate the system prompt for backends that take it out-of-band.

    Returns ``(system_text, others)`` where ``system_text`` is the flattened
    content of the first system message (``None`` when there is none) and
    ``others`` holds every non-system message in order.
    """
    system_text: Optional[str] = None
    others: List[ChatMessage] = []
    for m in messages:
        if m.role == "system":
            if system_text is None:
                system_text = m.text_or_joined()
            continue
        others.append(m)
    return system_text, others


def has_system_message(messages: Iterable[ChatMessage]) -> bool:
    return any(m.role == "system" for m in messages)


__all__ = [
    "is_diagnostic",
    "filter_diagnostic_messages",
    "drop_image_messages",
    "split_system_message",
    "has_system_message",
]
