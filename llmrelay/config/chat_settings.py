"""Orchestrator prompt settings.

``ChatSettings`` gathers the three knobs that shape the synthesized system
prompt. Values come from the ``chat:`` section of the external config file and
are overridden by ``LLMRELAY_CHAT_*`` environment variables.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from . import load_config_file

_ENV_PREFIX = "LLMRELAY_CHAT_"
_TRUTHY = {"1", "true", "yes", "on"}


class ChatSettings(BaseModel):
    """Prompt selection settings.

    Attributes:
        preprompt_disabled: Skip the capability-based base prompt.
        prompt_override: Replaces the base prompt; applied even when the
            pre-prompt is disabled.
        additional_prompt: Appended to the base prompt after a space.
    """

    model_config = ConfigDict(frozen=True)

    preprompt_disabled: bool = False
    prompt_override: Optional[str] = None
    additional_prompt: Optional[str] = None


def load_chat_settings() -> ChatSettings:
    """Build ``ChatSettings`` from the config file and environment."""
    data: Dict[str, Any] = {}
    section = load_config_file().get("chat")
    if isinstance(section, dict):
        data.update({k: v for k, v in section.items() if k in ChatSettings.model_fields})
    if (flag := os.getenv(f"{_ENV_PREFIX}PREPROMPT_DISABLED")) is not None:
        data["preprompt_disabled"] = flag.strip().lower() in _TRUTHY
    for field in ("prompt_override", "additional_prompt"):
        if (val := os.getenv(f"{_ENV_PREFIX}{field.upper()}")) is not None:
            data[field] = val
    return ChatSettings(**data)


__all__ = ["ChatSettings", "load_chat_settings"]
