"""Adapter tests for Anthropic and OpenAI with fake SDK handles.

The module-level SDK names are monkeypatched so no network or real SDK
client is involved.
"""
from __future__ import annotations

from typing import Any, Dict, List

import pytest

import llmrelay.anthropic.client as anthropic_mod
import llmrelay.openai.client as openai_mod
from llmrelay.anthropic.client import AnthropicClient
from llmrelay.base.models import ChatMessage, ProviderConfig, StreamCallbacks
from llmrelay.openai.client import OpenAIClient, is_reasoning_model
from llmrelay.tests.utils import ns

PNG = "data:image/png;base64,AAAA"


class _Recorder:
    def __init__(self, events: List[Any]) -> None:
        self.events = events
        self.requests: List[Dict[str, Any]] = []

    def create(self, **kwargs: Any):
        self.requests.append(kwargs)
        return iter(self.events)


@pytest.fixture()
def fake_anthropic(monkeypatch: pytest.MonkeyPatch):
    events = [
        ns(type="message_start"),
        ns(type="content_block_start"),
        ns(type="content_block_delta", delta=ns(type="text_delta", text="Hel")),
        ns(type="content_block_delta", delta=ns(type="input_json_delta", partial_json="{}")),
        ns(type="content_block_delta", delta=ns(type="text_delta", text="lo")),
        ns(type="message_stop"),
    ]
    recorder = _Recorder(events)
    constructed: List[Dict[str, Any]] = []

    def _factory(**kwargs: Any):
        constructed.append(kwargs)
        return ns(messages=recorder)

    monkeypatch.setattr(anthropic_mod, "anthropic", ns(Anthropic=_factory))
    return recorder, constructed


@pytest.fixture()
def fake_openai(monkeypatch: pytest.MonkeyPatch):
    chunks = [
        ns(choices=[ns(delta=ns(role="assistant", content=None))]),
        ns(choices=[ns(delta=ns(content="Hi"))]),
        ns(choices=[]),
        ns(choices=[ns(delta=ns(content=" there"))]),
    ]
    recorder = _Recorder(chunks)
    constructed: List[Dict[str, Any]] = []

    def _factory(**kwargs: Any):
        constructed.append(kwargs)
        return ns(chat=ns(completions=recorder))

    monkeypatch.setattr(openai_mod, "OpenAI", _factory)
    return recorder, constructed


def _cfg(provider: str, model: str, **kw: Any) -> ProviderConfig:
    return ProviderConfig(provider_id=provider, model_id=model, api_key="sk-dummy-123", **kw)  # pragma: allowlist secret


def test_anthropic_hoists_system_and_streams_text_deltas(fake_anthropic):
    recorder, constructed = fake_anthropic
    client = AnthropicClient(_cfg("anthropic", "claude-3-sonnet-20240229", temperature=0.2))
    done: List[str] = []
    text = client.chat(
        [
            ChatMessage(role="system", content="Be brief."),
            ChatMessage(role="user", content="hello"),
            ChatMessage(role="assistant", content="hi"),
            ChatMessage(role="user", content="more"),
        ],
        StreamCallbacks(on_complete=done.append),
    )
    assert text == "Hello" and done == ["Hello"]  # nosec B101
    assert constructed == [{"api_key": "sk-dummy-123"}]  # nosec B101  # pragma: allowlist secret
    req = recorder.requests[0]
    assert req["system"] == "Be brief."  # nosec B101
    assert [m["role"] for m in req["messages"]] == ["user", "assistant", "user"]  # nosec B101
    assert req["messages"][0]["content"] == [{"type": "text", "text": "hello"}]  # nosec B101
    assert req["max_tokens"] == 4096 and req["stream"] is True and req["temperature"] == 0.2  # nosec B101
    assert req["model"] == "claude-3-sonnet-20240229"  # nosec B101


def test_anthropic_omits_system_when_absent_and_formats_images(fake_anthropic):
    recorder, _ = fake_anthropic
    client = AnthropicClient(_cfg("anthropic", "claude-3-sonnet-20240229", endpoint="http://proxy.local"))
    client.chat([ChatMessage(role="user", content="look"), ChatMessage(role="user", content=PNG, kind="image")])
    req = recorder.requests[0]
    assert "system" not in req  # nosec B101
    image_blocks = req["messages"][1]["content"]
    assert image_blocks[0]["source"]["media_type"] == "image/png"  # nosec B101
    assert image_blocks[0]["source"]["data"] == "AAAA"  # nosec B101


def test_anthropic_passes_endpoint_as_base_url(fake_anthropic):
    _, constructed = fake_anthropic
    AnthropicClient(_cfg("anthropic", "m", endpoint="http://proxy.local"))
    assert constructed[0]["base_url"] == "http://proxy.local"  # nosec B101


def test_anthropic_without_sdk_raises(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(anthropic_mod, "anthropic", None)
    with pytest.raises(RuntimeError, match="anthropic SDK not installed"):
        AnthropicClient(_cfg("anthropic", "m"))


def test_openai_sends_system_inline_and_uses_max_tokens(fake_openai):
    recorder, _ = fake_openai
    client = OpenAIClient(_cfg("openai", "gpt-4o"))
    tokens: List[str] = []
    text = client.chat(
        [ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hi")],
        StreamCallbacks(on_token=tokens.append),
    )
    assert text == "Hi there" and tokens == ["Hi", " there"]  # nosec B101
    req = recorder.requests[0]
    assert req["messages"] == [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]  # nosec B101
    assert req["max_tokens"] == 4096 and "max_completion_tokens" not in req  # nosec B101
    assert req["stream"] is True  # nosec B101


def test_openai_reasoning_models_remap_system_and_budget(fake_openai):
    recorder, _ = fake_openai
    client = OpenAIClient(_cfg("openai", "o1-mini"))
    client.chat([ChatMessage(role="system", content="sys"), ChatMessage(role="user", content="hi")])
    req = recorder.requests[0]
    assert [m["role"] for m in req["messages"]] == ["user", "user"]  # nosec B101
    assert req["max_completion_tokens"] == 4096 and "max_tokens" not in req  # nosec B101


def test_openai_formats_images_as_image_url(fake_openai):
    recorder, _ = fake_openai
    OpenAIClient(_cfg("openai", "gpt-4o")).chat([ChatMessage(role="user", content=PNG, kind="image")])
    assert recorder.requests[0]["messages"][0]["content"] == [  # nosec B101
        {"type": "image_url", "image_url": {"url": PNG}}
    ]


def test_openai_uses_default_model_when_unset(fake_openai):
    client = OpenAIClient(ProviderConfig(provider_id="openai", api_key="sk-dummy-123"))  # pragma: allowlist secret
    assert client.model == "gpt-4-turbo-preview"  # nosec B101
    assert client.provider_name == "openai"  # nosec B101


def test_is_reasoning_model():
    assert is_reasoning_model("o1-preview") and not is_reasoning_model("gpt-4o")  # nosec B101
