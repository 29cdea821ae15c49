"""Pytest configuration for the llmrelay test suite.

Every test runs with provider credentials, config files and catalog files
stripped from the environment so results never depend on the developer's
shell. The ``log_events`` fixture captures structured events from the shared
``llmrelay`` logger (which does not propagate to the root logger).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from llmrelay.config import CONFIG_FILE_ENV, DOTENV_FILE_ENV, TEMPERATURE_ENV, clear_config_cache
from llmrelay.config.env import ENV_ALIASES, ENV_MAP

_MANAGED_ENV = (
    CONFIG_FILE_ENV,
    TEMPERATURE_ENV,
    "LLMRELAY_MODEL_CATALOG",
    "LLMRELAY_CHAT_PREPROMPT_DISABLED",
    "LLMRELAY_CHAT_PROMPT_OVERRIDE",
    "LLMRELAY_CHAT_ADDITIONAL_PROMPT",
    "LLMRELAY_SERVICE_CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Remove credentials and llmrelay settings from the environment."""
    names = set(ENV_MAP.values())
    for aliases in ENV_ALIASES.values():
        names.update(aliases)
    for prov in ("ANTHROPIC", "OPENAI", "GOOGLE", "GEMINI", "COHERE", "MISTRAL", "OLLAMA"):
        for suffix in ("MODEL", "BASE_URL", "TEMPERATURE"):
            names.add(f"{prov}_{suffix}")
    names.update(_MANAGED_ENV)
    for name in names:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(DOTENV_FILE_ENV, str(tmp_path / "missing.env"))
    clear_config_cache()
    yield
    clear_config_cache()


class _EventCollector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        payload["_level"] = record.levelname
        self.events.append(payload)


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[Dict[str, Any]]]:
    """Collect parsed JSON events emitted anywhere under the ``llmrelay`` logger."""
    from llmrelay.base.logging import LOG_LEVEL_ENV, get_logger

    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    base = get_logger()
    collector = _EventCollector()
    base.addHandler(collector)
    try:
        yield collector.events
    finally:
        base.removeHandler(collector)
