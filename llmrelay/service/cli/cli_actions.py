"""CLI subcommand handlers.

Purpose
-------
Keep ``main`` thin: each handler takes parsed arguments, does its work and
returns an exit code. No module-level side effects, safe to import in tests.

Exit codes
----------
- ``0``: success (or a dry-run plan printed).
- ``1``: the stream failed mid-flight; the error is printed as JSON to stderr.
- ``2``: unknown provider, missing credential or client construction failure.
- ``130``: the user pressed Ctrl-C; partial text has already been printed.
"""

from __future__ import annotations

import argparse
import contextlib
import json
import sys
import threading
from typing import Any, Dict, List, Optional, TextIO

from ...base.cancellation import CancellationToken
from ...base.constants import CREDENTIAL_FREE_PROVIDERS
from ...base.errors import ErrorCode, UnsupportedProviderError, classify_exception
from ...base.factory import ProviderFactory
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.models import ChatMessage, StreamCallbacks
from ...base.repositories import KeysRepository, ModelCatalog
from ...config import get_model
from ...config.env import canonical_provider, get_env_var_candidates
from ...di import ClientRegistry, build_registry
from .cli_utils import format_models, image_to_data_url, suppress_console_logs

EXIT_INTERRUPTED = 130
# Grace period for the worker to settle after Ctrl-C; a hung backend is abandoned.
INTERRUPT_JOIN_SECONDS = 2.0

_PREVIEW_LEN = 64


def plan_run(
    *,
    provider: str,
    model: Optional[str],
    prompt: Optional[str],
    keys: Optional[KeysRepository] = None,
) -> Dict[str, Any]:
    """Describe what ``chat`` would do, without constructing a client.

    Returns a JSON-serializable mapping with the resolved model, whether an
    adapter exists for the provider, and where (if anywhere) its key was found.
    """
    prov = canonical_provider(provider)
    keys = keys if keys is not None else KeysRepository()
    supported = ProviderFactory.is_supported(prov)
    resolution = keys.get_resolution(prov)
    return {
        "provider": prov,
        "model": model or (get_model(prov) if supported else None),
        "prompt_preview": (f"{prompt[:_PREVIEW_LEN]}..." if (prompt and len(prompt) > _PREVIEW_LEN) else prompt),
        "adapter_available": supported,
        "credential_free": prov in CREDENTIAL_FREE_PROVIDERS,
        "api_key_present": resolution.api_key is not None,
        "api_key_source": resolution.source,
        "set_one_of_env": list(get_env_var_candidates(prov)),
    }


def handle_dry_run(args: argparse.Namespace, *, out: TextIO | None = None) -> int:
    """Print the plan for ``args`` as one JSON line."""
    out = out or sys.stdout
    print(json.dumps(plan_run(provider=args.provider, model=args.model, prompt=args.prompt)), file=out)
    return 0


def handle_models(
    args: argparse.Namespace,
    *,
    catalog: Optional[ModelCatalog] = None,
    out: TextIO | None = None,
) -> int:
    """List catalog models, optionally for one provider."""
    out = out or sys.stdout
    catalog = catalog if catalog is not None else ModelCatalog()
    provider = canonical_provider(args.provider) if args.provider else None
    text = format_models(catalog.list_models(provider), mode="json" if args.json else "table")
    if text:
        print(text, file=out)
    return 0


def _build_messages(args: argparse.Namespace) -> List[ChatMessage]:
    messages: List[ChatMessage] = []
    if args.system:
        messages.append(ChatMessage(role="system", content=args.system))
    messages.append(ChatMessage(role="user", content=args.prompt))
    messages.extend(ChatMessage(role="user", content=image_to_data_url(p), kind="image") for p in args.image)
    return messages


def _fail(err: TextIO, payload: Dict[str, Any], code: int) -> int:
    print(json.dumps(payload), file=err)
    return code


def handle_chat(
    args: argparse.Namespace,
    *,
    registry: Optional[ClientRegistry] = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Stream one reply to ``out``.

    The exchange runs on a worker thread so that Ctrl-C on the main thread can
    cancel it; whatever text arrived before the cancel stays printed.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    registry = registry if registry is not None else build_registry()
    provider = canonical_provider(args.provider)

    try:
        messages = _build_messages(args)
    except (OSError, ValueError) as e:
        return _fail(err, {"error": str(e)}, 2)

    try:
        result = registry.create_client(provider, args.model)
    except UnsupportedProviderError as e:
        return _fail(err, {"error": e.message, "code": e.code.value}, 2)
    if not result.success:
        payload: Dict[str, Any] = {"error": result.message, "code": result.error.code.value}
        if result.error.code is ErrorCode.MISSING_CREDENTIAL:
            payload["set_one_of_env"] = list(get_env_var_candidates(provider))
        return _fail(err, payload, 2)

    client = result.client
    logger = get_logger(f"cli.{provider}")
    ctx = LogContext(provider=provider, model=client.model)
    token = CancellationToken()
    outcome: Dict[str, Any] = {}

    def _on_token(fragment: str) -> None:
        out.write(fragment)
        out.flush()

    def _worker() -> None:
        try:
            outcome["text"] = client.chat(messages, StreamCallbacks(on_token=_on_token), cancellation_token=token)
        except Exception as exc:  # reported by the main thread
            outcome["error"] = exc

    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1, emitted=None, tokens=None)
    interrupted = False
    with suppress_console_logs() if args.quiet_logs else contextlib.nullcontext():
        worker = threading.Thread(target=_worker, name="llmrelay-cli-chat", daemon=True)
        worker.start()
        try:
            while worker.is_alive():
                worker.join(0.1)
        except KeyboardInterrupt:
            interrupted = True
            token.cancel("interrupted")
            worker.join(INTERRUPT_JOIN_SECONDS)
    print(file=out)

    if "error" in outcome:
        exc = outcome["error"]
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="finalize",
            error_code=classify_exception(exc).value,
            emitted=False,
            tokens=None,
            error=str(exc),
        )
        return _fail(err, {"error": str(exc), "code": classify_exception(exc).value}, 1)
    normalized_log_event(
        logger,
        "cli.finalize",
        ctx,
        phase="finalize",
        emitted=bool(outcome.get("text")),
        tokens=None,
        cancelled=interrupted or None,
    )
    return EXIT_INTERRUPTED if interrupted else 0

