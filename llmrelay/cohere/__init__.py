"""Cohere v2 chat adapter."""

from .client import CohereClient

__all__ = ["CohereClient"]
