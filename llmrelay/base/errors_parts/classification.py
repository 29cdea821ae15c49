"""
Error classification helpers mapping transport exceptions to ``ErrorCode``.

Transport errors raised by vendor SDKs propagate to callers unchanged; this
module only derives the code written to the diagnostic log. HTTP status
extraction is tried first, then message heuristics.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_MESSAGE_PATTERNS = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden", "authentication")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for exceptions without an HTTP status."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _MESSAGE_PATTERNS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (sync/async).
        3. HTTP status mapping.
        4. Substring heuristics.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
]
