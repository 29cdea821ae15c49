"""CLI parser construction for ``llmrelay``.

Wires subparsers only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_DEFAULT_PROVIDER

COMMANDS = ("dry-run", "chat", "models")
DEFAULT_COMMAND = "dry-run"


def _str2bool(v: str | None) -> bool:
    """Permissive truthy/falsey parsing; ``None`` (bare flag) means True."""
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def _common() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR or a synonym")
    return common


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with ``dry-run``, ``chat`` and ``models``.

    No side effects; nothing here touches the network.
    """
    p = argparse.ArgumentParser(prog="llmrelay", description="LLM relay CLI (safe by default: dry-run)")
    sub = p.add_subparsers(dest="cmd")
    common = _common()

    p_plan = sub.add_parser("dry-run", parents=[common], help="Show what a chat call would do (default)")
    p_plan.add_argument("--provider", default=CLI_DEFAULT_PROVIDER)
    p_plan.add_argument("--model", default=None)
    p_plan.add_argument("--prompt", default=None)

    p_chat = sub.add_parser("chat", parents=[common], help="Stream a reply to stdout; Ctrl-C cancels")
    p_chat.add_argument("--provider", default=CLI_DEFAULT_PROVIDER)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--system", default=None, help="Optional system prompt")
    p_chat.add_argument("--image", action="append", default=[], help="PNG/JPEG file to attach (repeatable)")
    p_chat.add_argument(
        "--quiet-logs",
        nargs="?",
        const=True,
        type=_str2bool,
        default=True,
        help="Hide console logs while streaming (default true)",
    )

    p_models = sub.add_parser("models", parents=[common], help="List catalog models")
    p_models.add_argument("--provider", default=None)
    p_models.add_argument("--json", action="store_true")

    return p
