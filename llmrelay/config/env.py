"""llmrelay.config.env
===================

Provider → environment variable mapping for credentials.

``ENV_MAP`` holds the canonical variable per provider. Providers that accept
more than one name list them in ``ENV_ALIASES`` with the canonical name
first. Helpers return ``None`` for unknown providers or unset variables and
never raise; callers decide how to fall back.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider → env var mapping
ENV_MAP: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "google": "GEMINI_API_KEY",
    "cohere": "COHERE_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "cohere": ("COHERE_API_KEY", "CO_API_KEY"),
}

# Alternate provider spellings accepted at the edges (CLI, HTTP, config).
PROVIDER_ALIASES: Dict[str, str] = {
    "gemini": "google",
    "claude": "anthropic",
}


def canonical_provider(provider: Optional[str]) -> str:
    """Return the lower-cased canonical provider id."""
    p = (provider or "").strip().lower()
    return PROVIDER_ALIASES.get(p, p)


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder or test token.

    Heuristics (case-insensitive): contains 'placeholder', 'changeme' or
    'example', or starts with 'test_'.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    return ENV_MAP.get(canonical_provider(provider)) if provider else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names, canonical first."""
    p = canonical_provider(provider)
    canonical = ENV_MAP.get(p)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(p, ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        candidate; ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "PROVIDER_ALIASES",
    "canonical_provider",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
