"""Unified configuration layer for llmrelay.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional external config file (JSON or YAML) named by ``LLMRELAY_CONFIG_FILE``
3. Environment variables (``<PROVIDER>_MODEL``, ``<PROVIDER>_API_KEY``,
   ``<PROVIDER>_BASE_URL``, ``LLMRELAY_TEMPERATURE``)
4. API key via ``KeysRepository`` when still unset
5. In-code overrides passed to the helper

External config file structure example::

    anthropic:
      model: claude-3-sonnet-20240229
      api_key: sk-ant-...
    ollama:
      base_url: http://gpu-box:11434
      timeout_seconds: 300
    temperature: 0.4
    chat:
      additional_prompt: "Answer in English."

Public API
----------
* get_provider_config(provider, overrides=None) -> dict
* get_model(provider) -> str | None
* load_config_file() -> dict
* clear_config_cache()
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .env import canonical_provider, is_placeholder
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    COHERE_DEFAULT_MODEL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    GEMINI_DEFAULT_MODEL,
    MISTRAL_DEFAULT_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OLLAMA_DEFAULT_TIMEOUT_SECONDS,
    OPENAI_DEFAULT_MODEL,
)

CONFIG_FILE_ENV = "LLMRELAY_CONFIG_FILE"
DOTENV_FILE_ENV = "LLMRELAY_DOTENV_FILE"
TEMPERATURE_ENV = "LLMRELAY_TEMPERATURE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "anthropic": {"model": ANTHROPIC_DEFAULT_MODEL},
    "openai": {"model": OPENAI_DEFAULT_MODEL},
    "google": {"model": GEMINI_DEFAULT_MODEL},
    "cohere": {"model": COHERE_DEFAULT_MODEL},
    "mistral": {"model": MISTRAL_DEFAULT_MODEL},
    "ollama": {
        "model": OLLAMA_DEFAULT_MODEL,
        "base_url": OLLAMA_DEFAULT_HOST,
        "timeout_seconds": OLLAMA_DEFAULT_TIMEOUT_SECONDS,
    },
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_url": "BASE_URL",
    "temperature": "TEMPERATURE",
}

# Extra env prefixes consulted after the provider's own upper-cased name.
ENV_PREFIX_ALIASES: Dict[str, tuple] = {
    "google": ("GEMINI",),
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Existing
    variables are overridden only when they hold placeholder values.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def load_config_file() -> Dict[str, Any]:
    """Return the parsed external config file (cached), or ``{}``.

    JSON is tried first, then YAML. A file that parses to anything other than
    a mapping is treated as empty.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def clear_config_cache() -> None:
    """Forget the cached config file so the next read reloads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if (temp := os.getenv(TEMPERATURE_ENV)) is not None:
        out["temperature"] = temp
    prefixes = ENV_PREFIX_ALIASES.get(provider, ()) + (provider.upper(),)
    for prefix in prefixes:
        for field, suffix in ENV_FIELD_MAP.items():
            val = os.getenv(f"{prefix}_{suffix}")
            if val is not None:
                out[field] = val
    return out


def _coerce_numbers(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for field, kind in (("temperature", float), ("max_tokens", int), ("timeout_seconds", float)):
        if field in cfg and cfg[field] is not None:
            cfg[field] = kind(cfg[field])
    return cfg


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> key repo -> overrides

    Raises
    ------
    ValueError
        When a numeric field (``temperature``, ``max_tokens``,
        ``timeout_seconds``) cannot be parsed.
    """
    _load_dotenv_once()
    name = canonical_provider(provider)
    file_cfg = load_config_file()
    cfg: Dict[str, Any] = {"temperature": DEFAULT_TEMPERATURE, "max_tokens": DEFAULT_MAX_TOKENS}

    # 1. Defaults
    cfg |= DEFAULTS.get(name, {})

    # 2. External config file: global generation settings, then provider section
    for key in ("temperature", "max_tokens"):
        if file_cfg.get(key) is not None:
            cfg[key] = file_cfg[key]
    section = file_cfg.get(name)
    if isinstance(section, dict):
        cfg |= section

    # 3. Env overrides
    cfg |= _env_overrides(name)

    # 4. API key via KeysRepository (only if not already set); import lazily
    if not cfg.get("api_key") or is_placeholder(cfg.get("api_key")):
        from ..base.repositories.keys import KeysRepository

        if key := KeysRepository().get_api_key(name):
            cfg["api_key"] = key

    # 5. Explicit overrides arg
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return _coerce_numbers(cfg)


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "CONFIG_FILE_ENV",
    "TEMPERATURE_ENV",
    "DEFAULTS",
    "get_provider_config",
    "get_model",
    "load_config_file",
    "clear_config_cache",
]
