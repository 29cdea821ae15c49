"""Image payload helpers.

Images arrive as ``data:image/...;base64,`` URLs in a message's string
content. ``format_image_content`` converts one into the shape each backend
accepts, degrading to placeholder text where a backend has no image input.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Union

from ..constants import (
    IMAGE_DESCRIBE_PROMPT,
    IMAGE_INLINE_PREFIX,
    IMAGE_PLACEHOLDER,
    IMAGE_UNSUPPORTED_TEMPLATE,
)

_DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg);base64,")

ImageContent = Union[str, List[Dict[str, Any]]]


def is_image_data_url(content: Any) -> bool:
    """True when ``content`` is a string starting with ``data:image``."""
    return isinstance(content, str) and content.startswith("data:image")


def detect_media_type(data_url: str) -> str:
    """``image/png`` for PNG data URLs, ``image/jpeg`` for everything else."""
    return "image/png" if data_url.startswith("data:image/png") else "image/jpeg"


def strip_data_url_prefix(data_url: str) -> str:
    """Return the base64 payload of a PNG or JPEG data URL.

    Other media types are returned unchanged.
    """
    return _DATA_URL_PREFIX.sub("", data_url, count=1)


def format_image_content(provider_id: str, data_url: str) -> ImageContent:
    """Convert an image data URL into backend-shaped content.

    Unknown providers get the generic ``"[Image]"`` placeholder; cohere and
    mistral get an explicit "not supported" placeholder. Never raises.
    """
    mt = detect_media_type(data_url)
    if provider_id == "anthropic":
        return [
            {
                "type": "image",
                "source": {"type": "base64", "media_type": mt, "data": strip_data_url_prefix(data_url)},
            },
            {"type": "text", "text": IMAGE_DESCRIBE_PROMPT},
        ]
    if provider_id == "openai":
        return [{"type": "image_url", "image_url": {"url": data_url}}]
    if provider_id == "google":
        return [
            {"text": IMAGE_INLINE_PREFIX},
            {"inline_data": {"data": data_url, "mime_type": mt}},
        ]
    if provider_id in ("cohere", "mistral"):
        return IMAGE_UNSUPPORTED_TEMPLATE.format(provider=provider_id)
    return IMAGE_PLACEHOLDER


__all__ = [
    "ImageContent",
    "is_image_data_url",
    "detect_media_type",
    "strip_data_url_prefix",
    "format_image_content",
]
