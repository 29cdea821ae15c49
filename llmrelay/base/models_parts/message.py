"""
Chat message DTO shared by every adapter.

``ChatMessage`` is the single conversation-turn shape callers hand to
``chat()``. Content is either plain text or an ordered sequence of structured
parts (vendor-shaped mappings, SDK content-block objects or bare strings)
that adapters pass through untouched. ``name`` tags bookkeeping entries (for
example ``"Mode.ChatResponse"``) and ``kind="image"`` marks a turn carrying
an image data URL.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

Role = Literal["user", "assistant", "system"]
MessageKind = Literal["image"]

# A structured part is whatever the backend accepts; strings are allowed too.
ContentPart = Union[str, Dict[str, Any], Any]
MessageContent = Union[str, List[ContentPart]]


def part_field(part: Any, field: str) -> Any:
    """Read ``field`` from a structured part, mapping or attribute style."""
    if isinstance(part, Mapping):
        return part.get(field)
    return getattr(part, field, None)


@dataclass
class ChatMessage:
    """A single conversation turn.

    Attributes:
        role: ``"user"``, ``"assistant"`` or ``"system"``.
        content: Plain text or an ordered list of structured parts.
        name: Optional tag for bookkeeping entries.
        kind: ``"image"`` when the turn carries an image payload.
    """

    role: Role
    content: MessageContent
    name: Optional[str] = None
    kind: Optional[MessageKind] = None

    def text_or_joined(self) -> str:
        """Flatten content to text; non-text parts become ``[type]`` tokens."""
        if isinstance(self.content, str):
            return self.content
        parts: List[str] = []
        for p in self.content:
            if isinstance(p, str):
                parts.append(p)
                continue
            text = part_field(p, "text")
            if isinstance(text, str):
                parts.append(text)
            else:
                parts.append(f"[{part_field(p, 'type') or 'part'}]")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        if self.kind is not None:
            data["type"] = self.kind
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        """Build a message from a wire mapping (``type`` or ``kind`` marks images)."""
        return cls(
            role=data["role"],
            content=data.get("content", ""),
            name=data.get("name"),
            kind=data.get("kind") or data.get("type"),
        )


__all__ = [
    "ChatMessage",
    "ContentPart",
    "MessageContent",
    "MessageKind",
    "Role",
    "part_field",
]
