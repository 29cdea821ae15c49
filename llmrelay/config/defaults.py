"""llmrelay.config.defaults
========================

Central place for small, stable default values used across the llmrelay
package and its service layer. These defaults can be overridden via
environment variables or the external configuration file, but provide
sensible fallbacks for local development and tests.

This module avoids importing from other llmrelay packages to prevent circular
dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Generation settings ----
# Sampling temperature used when neither config nor env sets one.
DEFAULT_TEMPERATURE = 0.7
# Completion budget for backends that require an explicit limit.
DEFAULT_MAX_TOKENS = 4096

# ---- Orchestrator ----
# Label stored on a session when the overview call fails or returns nothing.
DEFAULT_SESSION_LABEL = "New Chat"
# Worker threads available to background overview calls.
OVERVIEW_MAX_WORKERS = 2

# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the dev server.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8091

# ---- CLI ----
CLI_DEFAULT_PROVIDER = "anthropic"

# ---- Provider-specific defaults ----
ANTHROPIC_DEFAULT_MODEL = "claude-3-sonnet-20240229"
OPENAI_DEFAULT_MODEL = "gpt-4-turbo-preview"
GEMINI_DEFAULT_MODEL = "gemini-pro"
COHERE_DEFAULT_MODEL = "command"
MISTRAL_DEFAULT_MODEL = "mistral-medium"

# Ollama (local daemon)
OLLAMA_DEFAULT_MODEL = "llama3"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
OLLAMA_DEFAULT_TIMEOUT_SECONDS = 120.0


__all__ = [
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_SESSION_LABEL",
    "OVERVIEW_MAX_WORKERS",
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    "CLI_DEFAULT_PROVIDER",
    "ANTHROPIC_DEFAULT_MODEL",
    "OPENAI_DEFAULT_MODEL",
    "GEMINI_DEFAULT_MODEL",
    "COHERE_DEFAULT_MODEL",
    "MISTRAL_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_HOST",
    "OLLAMA_DEFAULT_TIMEOUT_SECONDS",
]
