"""Chat orchestration: sessions, prompts and the turn manager."""

from .manager import ChatManager, SendResult
from .prompts import DEFAULT_PROMPTS, PromptSet
from .session import ChatSession, InMemorySessionStore

__all__ = [
    "ChatManager",
    "SendResult",
    "PromptSet",
    "DEFAULT_PROMPTS",
    "ChatSession",
    "InMemorySessionStore",
]
