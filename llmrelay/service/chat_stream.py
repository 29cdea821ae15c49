"""
Streaming chat route.

Purpose
-------
Expose ``POST /api/chat/stream`` as an NDJSON endpoint. Each line is one JSON
object with ``type`` in ``delta`` | ``final`` | ``cancelled`` | ``error`` and
the ``stream_id`` that ``POST /api/chat/{stream_id}/cancel`` accepts. The id is
also returned in the ``X-Stream-Id`` header.

Concurrency
-----------
Adapters stream synchronously, so the exchange runs on a worker thread that
feeds a queue; the response generator drains the queue. Exactly one terminal
line (``final``, ``cancelled`` or ``error``) ends every stream.
"""
from __future__ import annotations

import json
import queue
import threading
import uuid
from typing import Any, Dict, Iterator, Optional, Tuple

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from ..base.cancellation import CancellationToken
from ..base.errors import UnsupportedProviderError, classify_exception
from ..base.models import StreamCallbacks
from .app_parts.app_core import ChatBody, raise_for_client_result

router = APIRouter()

_DONE = object()


class StreamTable:
    """Tokens of in-flight HTTP streams, keyed by stream id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: Dict[str, CancellationToken] = {}

    def open(self) -> Tuple[str, CancellationToken]:
        stream_id = uuid.uuid4().hex
        token = CancellationToken()
        with self._lock:
            self._tokens[stream_id] = token
        return stream_id, token

    def close(self, stream_id: str) -> None:
        with self._lock:
            self._tokens.pop(stream_id, None)

    def cancel(self, stream_id: str) -> bool:
        with self._lock:
            token = self._tokens.get(stream_id)
        if token is None:
            return False
        token.cancel("cancelled via api")
        return True


def _line(payload: Dict[str, Any]) -> bytes:
    return (json.dumps(payload, ensure_ascii=False) + "\n").encode("utf-8")


@router.post("/api/chat/stream")
def post_chat_stream(body: ChatBody, request: Request) -> StreamingResponse:
    """Stream one exchange as NDJSON.

    Error handling:
        - Unknown provider -> HTTP 400.
        - Missing credential -> HTTP 401; construction failure -> HTTP 502.
        - Transport failure mid-stream -> a terminal ``error`` line.
    """
    registry = request.app.state.registry
    streams: StreamTable = request.app.state.streams
    try:
        result = registry.create_client(body.provider, body.model)
    except UnsupportedProviderError as e:
        raise HTTPException(status_code=400, detail={"code": e.code.value, "message": e.message}) from e
    raise_for_client_result(result)
    client = result.client
    messages = [m.to_message() for m in body.messages]
    stream_id, token = streams.open()
    events: "queue.Queue[Any]" = queue.Queue()

    def _worker() -> None:
        try:
            text = client.chat(
                messages,
                StreamCallbacks(on_token=lambda t: events.put({"type": "delta", "delta": t})),
                cancellation_token=token,
            )
            kind = "cancelled" if token.cancelled else "final"
            events.put({"type": kind, "text": text})
        except Exception as exc:  # surfaced to the HTTP client as a terminal line
            events.put({"type": "error", "code": classify_exception(exc).value, "error": str(exc)})
        finally:
            events.put(_DONE)

    def iter_ndjson() -> Iterator[bytes]:
        worker = threading.Thread(target=_worker, name=f"llmrelay-stream-{stream_id[:8]}", daemon=True)
        worker.start()
        try:
            while True:
                item: Optional[Any] = events.get()
                if item is _DONE:
                    break
                item["stream_id"] = stream_id
                yield _line(item)
        finally:
            # Client disconnects close the generator early; stop the exchange too.
            token.cancel("client disconnected")
            streams.close(stream_id)

    return StreamingResponse(
        iter_ndjson(),
        media_type="application/x-ndjson",
        headers={"X-Stream-Id": stream_id},
    )


@router.post("/api/chat/{stream_id}/cancel")
def post_cancel(stream_id: str, request: Request) -> Dict[str, Any]:
    """Cancel an in-flight stream; 404 when the id is unknown or finished."""
    if not request.app.state.streams.cancel(stream_id):
        raise HTTPException(status_code=404, detail="unknown stream")
    return {"ok": True, "cancelled": stream_id}


__all__ = ["router", "StreamTable"]
