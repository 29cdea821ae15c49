"""Formatter and context helpers consumed by ``llmrelay.base.logging``."""

from .json_formatter import JsonFormatter, ISO
from .logging_context import LogContext

__all__ = ["JsonFormatter", "ISO", "LogContext"]
