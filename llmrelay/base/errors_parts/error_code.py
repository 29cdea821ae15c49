"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the client registry, provider
adapters and the diagnostic log. Values are lowercase snake_case and are a
stable contract for logging and callers that branch on failure category.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Registry / construction failures
    MISSING_CREDENTIAL = "missing_credential"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    CLIENT_INIT_FAILED = "client_init_failed"

    # Transport failures, classified from SDK exceptions for the diagnostic log
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
