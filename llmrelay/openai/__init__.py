"""OpenAI Chat Completions adapter."""

from .client import OpenAIClient

__all__ = ["OpenAIClient"]
