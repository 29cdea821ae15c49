from __future__ import annotations

import importlib
from typing import Any, Dict

import pytest

from llmrelay.service import app as app_module
from llmrelay.service import dev_server


def test_app_module_builds_nothing_on_import():
    assert not hasattr(app_module, "app")  # nosec B101
    module_name, attr = dev_server.APP_FACTORY.split(":")
    assert getattr(importlib.import_module(module_name), attr) is app_module.create_app  # nosec B101


def test_main_serves_the_factory(monkeypatch: pytest.MonkeyPatch):
    calls: Dict[str, Any] = {}

    def _run(target, **kwargs):
        calls["target"] = target
        calls.update(kwargs)

    monkeypatch.setattr(dev_server.uvicorn, "run", _run)
    monkeypatch.setenv(dev_server.HOST_ENV, "0.0.0.0")
    monkeypatch.setenv(dev_server.PORT_ENV, "9001")
    monkeypatch.setenv(dev_server.RELOAD_ENV, "TRUE")
    dev_server.main()
    assert calls["target"] == dev_server.APP_FACTORY and calls["factory"] is True  # nosec B101
    assert (calls["host"], calls["port"], calls["reload"]) == ("0.0.0.0", 9001, True)  # nosec B101


@pytest.mark.parametrize("raw, expected", [(None, 8091), ("abc", 8091), ("0", 8091), ("70000", 8091), ("8123", 8123)])
def test_parse_port(raw, expected):
    assert dev_server._parse_port(raw, 8091) == expected  # nosec B101
