"""ChatManager orchestration: prompt synthesis, turns, stop and overviews."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

import pytest

from llmrelay.base.constants import CHAT_RESPONSE_TAG
from llmrelay.base.errors import ErrorCode
from llmrelay.base.models import ModelInfo
from llmrelay.base.repositories import KeysRepository, ModelCatalog
from llmrelay.chat import DEFAULT_PROMPTS, ChatManager, InMemorySessionStore
from llmrelay.config.chat_settings import ChatSettings
from llmrelay.di import build_registry
from llmrelay.tests.utils import FakeFactory, ScriptedAdapter

KEYS = {"anthropic": "sk-ant-dummy", "google": "g-dummy"}  # pragma: allowlist secret - dummy test values
PNG = "data:image/png;base64,AAAA"


@pytest.fixture()
def executor() -> Iterator[ThreadPoolExecutor]:
    ex = ThreadPoolExecutor(max_workers=1)
    yield ex
    ex.shutdown(wait=True)


def _manager(executor, *, settings: ChatSettings | None = None, chunks=("ok",), keys=KEYS) -> ChatManager:
    catalog = ModelCatalog([ModelInfo(id="coder", provider="ollama", capabilities={"autocoding": True})])
    registry = build_registry(KeysRepository(dict(keys)), catalog, factory=FakeFactory(chunks=chunks))
    return ChatManager(registry, InMemorySessionStore(), settings=settings or ChatSettings(), executor=executor)


def test_turn_appends_system_user_and_tagged_reply(executor):
    mgr = _manager(executor)
    result = mgr.send_message("hello", "claude-3-5-sonnet-20241022")
    assert result.success and result.text == "ok" and not result.cancelled  # nosec B101
    session = mgr.sessions.current()
    roles = [m.role for m in session.messages]
    assert roles == ["system", "user", "assistant"]  # nosec B101
    assert session.messages[0].content == DEFAULT_PROMPTS.tools  # nosec B101
    assert session.messages[2].name == CHAT_RESPONSE_TAG  # nosec B101
    assert result.overview.result(timeout=5) == "ok"  # nosec B101
    assert session.overview == "ok"  # nosec B101


def test_system_prompt_added_only_once(executor):
    mgr = _manager(executor)
    mgr.send_message("one", "gemini-pro")
    mgr.send_message("two", "gemini-pro")
    session = mgr.sessions.current()
    assert [m.role for m in session.messages].count("system") == 1  # nosec B101
    assert session.messages[0].content == DEFAULT_PROMPTS.chat  # nosec B101


def test_base_prompt_follows_capabilities(executor):
    mgr = _manager(executor)
    assert mgr._base_prompt("claude-3-5-sonnet-20241022") == DEFAULT_PROMPTS.tools  # nosec B101
    assert mgr._base_prompt("coder") == DEFAULT_PROMPTS.autocoding  # nosec B101
    assert mgr._base_prompt("gemini-pro") == DEFAULT_PROMPTS.chat  # nosec B101
    assert mgr._base_prompt("unknown") == DEFAULT_PROMPTS.chat  # nosec B101


@pytest.mark.parametrize(
    "settings, expected",
    [
        (ChatSettings(prompt_override="Custom."), "Custom."),
        (ChatSettings(additional_prompt="Be terse."), f"{DEFAULT_PROMPTS.chat} Be terse."),
        (ChatSettings(preprompt_disabled=True, prompt_override="Only this."), "Only this."),
        (ChatSettings(prompt_override="Custom.", additional_prompt="Also."), "Custom. Also."),
        (ChatSettings(preprompt_disabled=True), None),
    ],
)
def test_prompt_synthesis_variants(executor, settings, expected):
    mgr = _manager(executor, settings=settings)
    session = mgr.sessions.create()
    added = mgr.ensure_system_prompt(session, "gemini-pro")
    if expected is None:
        assert added is False and session.messages == []  # nosec B101
    else:
        assert added is True and session.messages[0].content == expected  # nosec B101


def test_images_are_appended_after_the_user_message(executor):
    mgr = _manager(executor)
    mgr.send_message("what is this", "gemini-pro", images=[PNG])
    kinds = [(m.role, m.kind) for m in mgr.sessions.current().messages]
    assert kinds[1:3] == [("user", None), ("user", "image")]  # nosec B101


def test_unknown_model_fails_without_touching_session(executor):
    mgr = _manager(executor)
    result = mgr.send_message("hi", "no-such-model")
    assert not result.success and result.message == "Model.no-such-model.Unknown"  # nosec B101
    assert mgr.sessions.current().messages == []  # nosec B101


def test_missing_key_is_reported(executor, log_events):
    mgr = _manager(executor, keys={})
    result = mgr.send_message("hi", "gpt-4o")
    assert not result.success and result.message == "APIKey.openai.Missing"  # nosec B101
    init = mgr.initialize_client("gpt-4o")
    assert init.error.code is ErrorCode.MISSING_CREDENTIAL  # nosec B101
    assert any(e["event"] == "chat.init_failed" for e in log_events)  # nosec B101


def test_client_is_reused_while_model_is_unchanged(executor):
    mgr = _manager(executor)
    first = mgr.initialize_client("gemini-pro").client
    assert mgr.initialize_client("gemini-pro").client is first  # nosec B101
    assert mgr.initialize_client("claude-3-sonnet-20240229").client is not first  # nosec B101


def test_stop_generation_keeps_partial_reply(executor):
    mgr = _manager(executor, chunks=("a", "b", "c"))
    adapter = mgr.initialize_client("gemini-pro").client
    adapter.before_chunk = lambda i: mgr.stop_generation() if i == 2 else None
    result = mgr.send_message("hi", "gemini-pro")
    assert result.success and result.cancelled and result.text == "ab"  # nosec B101
    reply = mgr.sessions.current().messages[-1]
    assert reply.role == "assistant" and reply.content == "ab"  # nosec B101
    result.overview.result(timeout=5)


def test_stop_before_first_token_appends_no_reply(executor):
    mgr = _manager(executor, chunks=("a",))
    adapter = mgr.initialize_client("gemini-pro").client
    adapter.before_chunk = lambda i: mgr.stop_generation()
    result = mgr.send_message("hi", "gemini-pro")
    assert result.cancelled and result.text == ""  # nosec B101
    assert [m.role for m in mgr.sessions.current().messages] == ["system", "user"]  # nosec B101
    result.overview.result(timeout=5)


def test_stop_generation_without_active_turn_is_harmless(executor):
    _manager(executor).stop_generation()


def test_transport_error_propagates_and_keeps_user_message(executor):
    mgr = _manager(executor)
    adapter = mgr.initialize_client("gemini-pro").client
    adapter.error = ConnectionError("reset")
    with pytest.raises(ConnectionError):
        mgr.send_message("hi", "gemini-pro")
    assert mgr.sessions.current().messages[-1].content == "hi"  # nosec B101


def test_overview_falls_back_on_failure_or_blank_output(executor, log_events):
    mgr = _manager(executor)
    assert mgr.generate_session_overview("hi") == "New Chat"  # nosec B101

    failing = ScriptedAdapter(start_error=RuntimeError("rate limit"))
    assert mgr.generate_session_overview("hi", failing) == "New Chat"  # nosec B101
    assert any(e["event"] == "chat.overview_failed" for e in log_events)  # nosec B101

    blank = ScriptedAdapter(chunks=["  ", "\n"])
    assert mgr.generate_session_overview("hi", blank) == "New Chat"  # nosec B101

    good = ScriptedAdapter(chunks=[" Trip ", "planning "])
    assert mgr.generate_session_overview("hi", good) == "Trip planning"  # nosec B101
    assert good.requests[0][0].content == DEFAULT_PROMPTS.session_summary  # nosec B101


def test_close_leaves_injected_executor_running(executor):
    mgr = _manager(executor)
    mgr.close()
    assert executor.submit(lambda: 1).result(timeout=5) == 1  # nosec B101
