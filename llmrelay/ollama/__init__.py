"""Ollama local-daemon adapter."""

from .client import OllamaClient

__all__ = ["OllamaClient"]
