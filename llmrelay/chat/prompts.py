"""System prompt texts used by the orchestrator.

The strings are deliberately plain defaults; deployments pass their own
:class:`PromptSet` to ``ChatManager``.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PromptSet:
    """Prompt texts keyed by purpose.

    Attributes:
        chat: Default conversational system prompt.
        autocoding: Prompt for models flagged ``autocoding``.
        tools: Prompt for models flagged ``tools``; wins over ``autocoding``.
        session_summary: Instruction for the short session label call.
    """

    chat: str = "You are a helpful assistant. Answer clearly and concisely."
    autocoding: str = (
        "You are an expert programming assistant. When asked for code changes, "
        "reply with complete, working code and a short explanation."
    )
    tools: str = (
        "You are an expert programming assistant with access to tools. Use them "
        "when they help you answer accurately."
    )
    session_summary: str = (
        "Summarize the user's message as a chat title of at most five words. "
        "Reply with the title only."
    )


DEFAULT_PROMPTS = PromptSet()

__all__ = ["PromptSet", "DEFAULT_PROMPTS"]
