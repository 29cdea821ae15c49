"""Request bodies and helpers shared by the HTTP routes."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from ...base.errors import ErrorCode
from ...base.models import ChatMessage, ClientResult, ModelInfo
from ...config.env import ENV_ALIASES, ENV_MAP, is_placeholder


class ChatMessageDTO(BaseModel):
    """A single wire message; ``type="image"`` marks an image turn."""

    role: str
    content: Any
    name: Optional[str] = None
    type: Optional[str] = None

    def to_message(self) -> ChatMessage:
        return ChatMessage.from_dict(self.model_dump(exclude_none=True))


class ChatBody(BaseModel):
    """Body of ``POST /api/chat/stream``."""

    provider: str
    model: Optional[str] = None
    messages: List[ChatMessageDTO] = Field(min_length=1)


class KeysBody(BaseModel):
    """Mapping of provider environment variable names to API keys."""

    keys: Dict[str, str]


# Failure code -> HTTP status for client construction results.
_STATUS_BY_CODE = {
    ErrorCode.MISSING_CREDENTIAL: 401,
    ErrorCode.CLIENT_INIT_FAILED: 502,
}


def raise_for_client_result(result: ClientResult) -> None:
    """Convert a failed ``ClientResult`` into an ``HTTPException``."""
    if result.success:
        return
    code = result.error.code if result.error is not None else ErrorCode.UNKNOWN
    raise HTTPException(
        status_code=_STATUS_BY_CODE.get(code, 400),
        detail={"code": code.value, "message": result.message},
    )


def build_env_to_provider_map() -> Dict[str, str]:
    """Map canonical and alias env var names to provider ids."""
    env_to_provider: Dict[str, str] = {v: k for k, v in ENV_MAP.items()}
    for prov, names in ENV_ALIASES.items():
        for n in names:
            env_to_provider.setdefault(n, prov)
    return env_to_provider


def acceptable_key(candidate: str) -> bool:
    """Reject empty, non-ASCII, fully masked or placeholder keys."""
    return bool(candidate) and candidate.isascii() and set(candidate) != {"*"} and not is_placeholder(candidate)


def model_to_dict(info: ModelInfo) -> Dict[str, Any]:
    return info.to_dict()


__all__ = [
    "ChatMessageDTO",
    "ChatBody",
    "KeysBody",
    "raise_for_client_result",
    "build_env_to_provider_map",
    "acceptable_key",
    "model_to_dict",
]
