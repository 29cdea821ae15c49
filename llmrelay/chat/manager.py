"""ChatManager: orchestrates one user turn end to end.

A turn resolves a client for the selected model through the registry, makes
sure the session carries a system prompt, streams the exchange, records the
assistant reply and then, off the caller's thread, asks the same client for a
short session label.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..base.cancellation import CancellationToken
from ..base.constants import CHAT_RESPONSE_TAG
from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import ChatClient
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatMessage, ClientResult, ModelInfo, StreamCallbacks
from ..base.utils.messages import has_system_message
from ..config.chat_settings import ChatSettings, load_chat_settings
from ..config.defaults import DEFAULT_SESSION_LABEL, OVERVIEW_MAX_WORKERS
from ..di.container import ClientRegistry
from .prompts import DEFAULT_PROMPTS, PromptSet
from .session import ChatSession, InMemorySessionStore


@dataclass
class SendResult:
    """Outcome of ``ChatManager.send_message``.

    Attributes:
        success: False when no client could be obtained; nothing was streamed.
        text: Assistant text (partial when ``cancelled``).
        cancelled: True when the exchange was stopped before completion.
        message: User-facing failure message (e.g. ``APIKey.openai.Missing``).
        overview: Future resolving to the session label, when scheduled.
    """

    success: bool
    text: str = ""
    cancelled: bool = False
    message: Optional[str] = None
    overview: Optional["Future[str]"] = None


class ChatManager:
    """Per-conversation orchestrator bound to one registry and session store."""

    def __init__(
        self,
        registry: ClientRegistry,
        sessions: Optional[InMemorySessionStore] = None,
        *,
        prompts: PromptSet = DEFAULT_PROMPTS,
        settings: Optional[ChatSettings] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._registry = registry
        self._sessions = sessions if sessions is not None else InMemorySessionStore()
        self._prompts = prompts
        self._settings = settings if settings is not None else load_chat_settings()
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(
            max_workers=OVERVIEW_MAX_WORKERS, thread_name_prefix="llmrelay-overview"
        )
        self._client: Optional[ChatClient] = None
        self._current_model: Optional[str] = None
        self._token_lock = threading.Lock()
        self._current_token: Optional[CancellationToken] = None
        self._logger = get_logger("chat.manager")

    @property
    def sessions(self) -> InMemorySessionStore:
        return self._sessions

    @property
    def client(self) -> Optional[ChatClient]:
        return self._client

    # ---- client ----
    def _model_info(self, model_id: str) -> Optional[ModelInfo]:
        return self._registry.models.get_model_info(model_id)

    def initialize_client(self, model_id: str) -> ClientResult:
        """Obtain a client for ``model_id``; reuse the current one when unchanged.

        Raises
        ------
        UnsupportedProviderError
            If the catalog routes the model to an unknown provider.
        """
        if self._client is not None and self._current_model == model_id:
            return ClientResult.ok(self._client)
        info = self._model_info(model_id)
        if info is None:
            return ClientResult.failed(
                ProviderError(
                    code=ErrorCode.NOT_FOUND,
                    message=f"Model.{model_id}.Unknown",
                    provider="unknown",
                    model=model_id,
                )
            )
        result = self._registry.create_client(info.provider, model_id)
        if result.success and result.client is not None:
            self._client = result.client
            self._current_model = model_id
        return result

    # ---- system prompt ----
    def _base_prompt(self, model_id: str) -> str:
        info = self._model_info(model_id)
        if info is not None and info.supports("tools"):
            return self._prompts.tools
        if info is not None and info.supports("autocoding"):
            return self._prompts.autocoding
        return self._prompts.chat

    def ensure_system_prompt(self, session: ChatSession, model_id: str) -> bool:
        """Add a system message when the session has none. Returns True if added.

        The override replaces the capability-based prompt and is honored even
        when the pre-prompt is disabled. With the pre-prompt disabled and no
        override, nothing is added.
        """
        if has_system_message(session.messages):
            return False
        override = self._settings.prompt_override
        if self._settings.preprompt_disabled and not override:
            return False
        prompt = override or self._base_prompt(model_id)
        if self._settings.additional_prompt:
            prompt += f" {self._settings.additional_prompt}"
        session.append(ChatMessage(role="system", content=prompt))
        return True

    # ---- turn ----
    def send_message(
        self,
        text: str,
        model_id: str,
        callbacks: Optional[StreamCallbacks] = None,
        images: Iterable[str] = (),
        *,
        session: Optional[ChatSession] = None,
    ) -> SendResult:
        """Run one user turn.

        Transport errors propagate unchanged; the user message stays in the
        session so the turn can be retried.
        """
        init = self.initialize_client(model_id)
        if not init.success or init.client is None:
            log_event(self._logger, "chat.init_failed", LogContext(model=model_id), message=init.message)
            return SendResult(success=False, message=init.message)

        client = init.client
        session = session or self._sessions.current()
        self.ensure_system_prompt(session, model_id)
        session.append(ChatMessage(role="user", content=text))
        for data_url in images:
            session.append(ChatMessage(role="user", content=data_url, kind="image"))

        token = CancellationToken()
        with self._token_lock:
            self._current_token = token
        try:
            reply = client.chat(list(session.messages), callbacks, cancellation_token=token)
        finally:
            with self._token_lock:
                if self._current_token is token:
                    self._current_token = None

        cancelled = token.cancelled
        if reply or not cancelled:
            session.append(ChatMessage(role="assistant", content=reply, name=CHAT_RESPONSE_TAG))

        overview = self._executor.submit(self._update_overview, client, session.id, text)
        return SendResult(success=True, text=reply, cancelled=cancelled, overview=overview)

    def stop_generation(self, reason: Optional[str] = None) -> None:
        """Cancel the exchange started by the latest ``send_message`` only."""
        with self._token_lock:
            token = self._current_token
        if token is not None:
            token.cancel(reason or "stopped by user")

    # ---- overview ----
    def generate_session_overview(self, text: str, client: Optional[ChatClient] = None) -> str:
        """Ask for a short session label. Never raises; falls back to ``"New Chat"``."""
        client = client or self._client
        if client is None:
            return DEFAULT_SESSION_LABEL
        messages: List[ChatMessage] = [
            ChatMessage(role="system", content=self._prompts.session_summary),
            ChatMessage(role="user", content=text),
        ]
        captured: List[str] = []
        try:
            client.chat(messages, StreamCallbacks(on_complete=captured.append))
        except Exception as exc:
            log_event(
                self._logger,
                "chat.overview_failed",
                LogContext(provider=client.provider_name, model=client.model),
                level=logging.DEBUG,
                error=str(exc),
            )
            return DEFAULT_SESSION_LABEL
        overview = captured[0].strip() if captured else ""
        return overview or DEFAULT_SESSION_LABEL

    def _update_overview(self, client: ChatClient, session_id: str, text: str) -> str:
        overview = self.generate_session_overview(text, client)
        self._sessions.update_overview(session_id, overview)
        return overview

    def close(self) -> None:
        """Shut down the overview executor when this manager created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)


__all__ = ["ChatManager", "SendResult"]
