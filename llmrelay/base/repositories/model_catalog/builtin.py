"""Built-in model catalog entries.

Kept deliberately small; deployments extend or override them through a
catalog file (see ``loader``).
"""
from __future__ import annotations

from typing import Any, Dict, List

BUILTIN_MODELS: List[Dict[str, Any]] = [
    {
        "id": "claude-3-sonnet-20240229",
        "provider": "anthropic",
        "name": "Claude 3 Sonnet",
        "capabilities": {"vision": True, "tools": True},
    },
    {
        "id": "claude-3-5-sonnet-20241022",
        "provider": "anthropic",
        "name": "Claude 3.5 Sonnet",
        "capabilities": {"vision": True, "tools": True, "autocoding": True},
    },
    {
        "id": "gpt-4-turbo-preview",
        "provider": "openai",
        "name": "GPT-4 Turbo",
        "capabilities": {"tools": True},
    },
    {
        "id": "gpt-4o",
        "provider": "openai",
        "name": "GPT-4o",
        "capabilities": {"vision": True, "tools": True, "autocoding": True},
    },
    {
        "id": "o1-mini",
        "provider": "openai",
        "name": "o1 mini",
        "capabilities": {},
    },
    {
        "id": "gemini-pro",
        "provider": "google",
        "name": "Gemini Pro",
        "capabilities": {"vision": True},
    },
    {
        "id": "command",
        "provider": "cohere",
        "name": "Command",
        "capabilities": {},
    },
    {
        "id": "command-r-plus",
        "provider": "cohere",
        "name": "Command R+",
        "capabilities": {"tools": True},
    },
    {
        "id": "mistral-medium",
        "provider": "mistral",
        "name": "Mistral Medium",
        "capabilities": {},
    },
    {
        "id": "llama3",
        "provider": "ollama",
        "name": "Llama 3 (local)",
        "endpoint": "http://localhost:11434",
        "capabilities": {},
    },
]

__all__ = ["BUILTIN_MODELS"]
