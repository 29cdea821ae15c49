"""CLI tests: default dry-run, models listing and streamed chat."""
from __future__ import annotations

import io
import json
import logging
import threading
import time

import pytest

from llmrelay.base.logging import BASE_LOGGER_NAME, get_logger
from llmrelay.base.repositories import KeysRepository, ModelCatalog
from llmrelay.di import build_registry
from llmrelay.service.cli import cli_actions, main
from llmrelay.service.cli.cli_actions import EXIT_INTERRUPTED, handle_chat, plan_run
from llmrelay.service.cli.cli_parser import build_parser
from llmrelay.service.cli.cli_utils import format_models, image_to_data_url, parse_verbosity, suppress_console_logs
from llmrelay.tests.utils import FakeFactory, ns

KEYS = {"anthropic": "sk-ant-dummy"}  # pragma: allowlist secret - dummy test value


def _registry(**factory_kwargs):
    return build_registry(KeysRepository(dict(KEYS)), ModelCatalog(), factory=FakeFactory(**factory_kwargs))


def _chat(argv, registry):
    out, err = io.StringIO(), io.StringIO()
    args = build_parser().parse_args(["chat", *argv])
    code = handle_chat(args, registry=registry, out=out, err=err)
    return code, out.getvalue(), err.getvalue()


def test_dry_run_is_the_default(capsys):
    assert main(["--provider", "openai", "--prompt", "hello"]) == 0  # nosec B101
    plan = json.loads(capsys.readouterr().out)
    assert plan["provider"] == "openai" and plan["model"] == "gpt-4-turbo-preview"  # nosec B101
    assert plan["adapter_available"] is True and plan["api_key_present"] is False  # nosec B101
    assert plan["set_one_of_env"] == ["OPENAI_API_KEY"]  # nosec B101


def test_plan_run_reports_key_source_and_preview(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env")  # pragma: allowlist secret
    plan = plan_run(provider="claude", model=None, prompt="x" * 100)
    assert plan["provider"] == "anthropic" and plan["api_key_source"] == "env"  # nosec B101
    assert plan["prompt_preview"] == "x" * 64 + "..."  # nosec B101
    unknown = plan_run(provider="nonexistent", model=None, prompt=None)
    assert unknown["adapter_available"] is False and unknown["model"] is None  # nosec B101
    assert plan_run(provider="ollama", model=None, prompt=None)["credential_free"] is True  # nosec B101


def test_models_table_and_json(capsys):
    assert main(["models", "--provider", "openai"]) == 0  # nosec B101
    table = capsys.readouterr().out
    assert "gpt-4o" in table and "claude" not in table  # nosec B101
    assert main(["models", "--provider", "gemini", "--json"]) == 0  # nosec B101
    entries = json.loads(capsys.readouterr().out)
    assert entries and all(e["provider"] == "google" for e in entries)  # nosec B101


def test_chat_streams_to_stdout():
    registry = _registry(chunks=("Hel", "lo"))
    code, out, err = _chat(["--provider", "anthropic", "--prompt", "hi", "--system", "be brief"], registry)
    assert code == 0 and out == "Hello\n" and err == ""  # nosec B101
    adapter = registry.get_instance("anthropic", None)
    assert [m.role for m in adapter.requests[0]] == ["system", "user"]  # nosec B101


def test_chat_uses_injected_registry_even_when_empty():
    registry = _registry(chunks=("ok",))
    assert len(registry) == 0  # nosec B101
    code, out, _ = _chat(["--prompt", "hi"], registry)
    assert code == 0 and out == "ok\n" and len(registry) == 1  # nosec B101


def test_chat_attaches_images(tmp_path):
    img = tmp_path / "pic.png"
    img.write_bytes(b"\x89PNG\r\n")
    registry = _registry()
    code, _, _ = _chat(["--prompt", "what is this", "--image", str(img)], registry)
    assert code == 0  # nosec B101
    sent = registry.get_instance("anthropic", None).requests[0]
    assert sent[-1].kind == "image" and sent[-1].content.startswith("data:image/png;base64,")  # nosec B101


def test_chat_rejects_unsupported_image_type(tmp_path):
    gif = tmp_path / "pic.gif"
    gif.write_bytes(b"GIF89a")
    code, _, err = _chat(["--prompt", "x", "--image", str(gif)], _registry())
    assert code == 2 and "unsupported image type" in err  # nosec B101


def test_chat_missing_key_and_unknown_provider():
    code, _, err = _chat(["--provider", "openai", "--prompt", "hi"], _registry())
    payload = json.loads(err)
    assert code == 2 and payload["code"] == "missing_credential"  # nosec B101
    assert payload["set_one_of_env"] == ["OPENAI_API_KEY"]  # nosec B101

    code, _, err = _chat(["--provider", "nonexistent", "--prompt", "hi"], _registry())
    assert code == 2 and json.loads(err)["code"] == "unsupported_provider"  # nosec B101


def test_chat_stream_failure_exits_1():
    registry = _registry(chunks=("par",))
    registry.create_client("anthropic").client.error = ConnectionError("connection reset")
    code, out, err = _chat(["--prompt", "hi"], registry)
    assert code == 1 and out == "par\n"  # nosec B101
    assert json.loads(err)["error"] == "connection reset"  # nosec B101


def _interrupting_thread(ready: threading.Event):
    """Thread class whose first polling join raises Ctrl-C once ``ready`` is set."""

    class _InterruptingThread(threading.Thread):
        fired = False

        def join(self, timeout=None):
            if timeout is not None and not _InterruptingThread.fired:
                ready.wait(5)
                _InterruptingThread.fired = True
                raise KeyboardInterrupt
            return super().join(timeout)

    return _InterruptingThread


def test_ctrl_c_cancels_and_keeps_partial_output(monkeypatch: pytest.MonkeyPatch):
    registry = _registry(chunks=("a", "b", "c"))
    adapter = registry.create_client("anthropic").client
    first_token_seen = threading.Event()

    def _before(i: int) -> None:
        if i != 1:
            return
        first_token_seen.set()
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline and not any(t.cancelled for t in list(adapter._inflight)):
            time.sleep(0.01)

    adapter.before_chunk = _before
    monkeypatch.setattr(cli_actions, "threading", ns(Thread=_interrupting_thread(first_token_seen)))
    code, out, _ = _chat(["--prompt", "hi"], registry)
    assert code == EXIT_INTERRUPTED and out == "a\n"  # nosec B101


def test_parse_verbosity():
    assert parse_verbosity("verbose") == "DEBUG"  # nosec B101
    assert parse_verbosity(" warning ") == "WARNING"  # nosec B101
    assert parse_verbosity("loud") is None  # nosec B101


def test_unknown_log_level_is_a_usage_error():
    with pytest.raises(SystemExit):
        main(["models", "--log-level", "loud"])


def test_suppress_console_logs_restores_handlers():
    get_logger()
    base = logging.getLogger(BASE_LOGGER_NAME)
    before = list(base.handlers)
    with suppress_console_logs():
        assert not any(getattr(h, "_llmrelay_console_handler", False) for h in base.handlers)  # nosec B101
    assert set(base.handlers) == set(before)  # nosec B101


def test_format_models_table_lists_enabled_capabilities():
    catalog = ModelCatalog()
    text = format_models(catalog.list_models("anthropic"))
    line = next(ln for ln in text.splitlines() if "claude-3-5-sonnet-20241022" in ln)
    assert line.split()[-1] == "autocoding,tools,vision"  # nosec B101
    assert format_models([]) == ""  # nosec B101


def test_image_to_data_url_jpeg(tmp_path):
    img = tmp_path / "p.JPG"
    img.write_bytes(b"\xff\xd8")
    assert image_to_data_url(str(img)) == "data:image/jpeg;base64,/9g="  # nosec B101


def test_ctrl_c_returns_even_when_backend_hangs(monkeypatch: pytest.MonkeyPatch):
    registry = _registry(chunks=("a", "b"))
    adapter = registry.create_client("anthropic").client
    first_token_seen = threading.Event()
    release = threading.Event()

    def _hang(i: int) -> None:
        if i == 1:
            first_token_seen.set()
            release.wait(10)

    adapter.before_chunk = _hang
    monkeypatch.setattr(cli_actions, "INTERRUPT_JOIN_SECONDS", 0.1)
    monkeypatch.setattr(cli_actions, "threading", ns(Thread=_interrupting_thread(first_token_seen)))
    started = time.monotonic()
    try:
        code, out, _ = _chat(["--prompt", "hi"], registry)
    finally:
        release.set()
    assert code == EXIT_INTERRUPTED and out.startswith("a\n")  # nosec B101
    assert time.monotonic() - started < 5  # nosec B101
