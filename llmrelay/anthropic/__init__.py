"""Anthropic Messages API adapter."""

from .client import AnthropicClient

__all__ = ["AnthropicClient"]
