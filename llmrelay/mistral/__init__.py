"""Mistral chat adapter."""

from .client import MistralClient

__all__ = ["MistralClient"]
