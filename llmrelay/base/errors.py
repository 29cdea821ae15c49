"""Unified error taxonomy public surface.

Re-exports the implementations under ``llmrelay.base.errors_parts`` to keep a
stable import path for adapters, the registry and callers.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ClientInitError,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ClientInitError",
    "classify_exception",
]
