"""Message normalization utilities."""

from .images import detect_media_type, format_image_content, is_image_data_url, strip_data_url_prefix
from .messages import (
    drop_image_messages,
    filter_diagnostic_messages,
    has_system_message,
    is_diagnostic,
    split_system_message,
)

__all__ = [
    "detect_media_type",
    "format_image_content",
    "is_image_data_url",
    "strip_data_url_prefix",
    "drop_image_messages",
    "filter_diagnostic_messages",
    "has_system_message",
    "is_diagnostic",
    "split_system_message",
]
