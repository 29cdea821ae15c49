"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llmrelay.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ClientInitError,
    MissingCredentialError,
    ProviderError,
    UnsupportedProviderError,
)
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "MissingCredentialError",
    "UnsupportedProviderError",
    "ClientInitError",
    "classify_exception",
]
