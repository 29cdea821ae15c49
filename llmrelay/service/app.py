"""
HTTP surface for the relay.

``create_app`` wires a FastAPI application around one ``ClientRegistry``, one
``KeysRepository`` and one ``ModelCatalog``. Keys stored through ``/api/keys``
live in process memory only; storing or deleting one invalidates the cached
clients of that provider through the repository listener bound by
``build_registry``.

There is no module-level app; ``dev_server`` hands ``create_app`` to uvicorn
as a factory.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..base.logging import get_logger, log_event
from ..base.repositories import KeysRepository, ModelCatalog
from ..config.defaults import SERVICE_CORS_DEFAULT_ORIGINS
from ..config.env import ENV_MAP, canonical_provider
from ..di import ClientRegistry, build_registry
from .app_parts.app_core import KeysBody, acceptable_key, build_env_to_provider_map, model_to_dict
from .chat_stream import StreamTable, router as chat_router

CORS_ORIGINS_ENV = "LLMRELAY_SERVICE_CORS_ORIGINS"

_logger = get_logger("service")


def _cors_origins() -> List[str]:
    raw = os.getenv(CORS_ORIGINS_ENV) or SERVICE_CORS_DEFAULT_ORIGINS
    return [o.strip() for o in raw.split(",") if o.strip()]


def _mask(value: str) -> str:
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"


def create_app(
    registry: Optional[ClientRegistry] = None,
    keys: Optional[KeysRepository] = None,
    catalog: Optional[ModelCatalog] = None,
) -> FastAPI:
    """Build the FastAPI application.

    When ``registry`` is omitted one is built from ``keys`` and ``catalog``
    (themselves defaulted), with credential events already bound.
    """
    if registry is None:
        keys = keys if keys is not None else KeysRepository()
        catalog = catalog if catalog is not None else ModelCatalog()
        registry = build_registry(keys, catalog)
    else:
        keys = keys if keys is not None else registry.credentials
        catalog = catalog if catalog is not None else registry.models

    app = FastAPI(title="LLM Relay", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.registry = registry
    app.state.keys = keys
    app.state.catalog = catalog
    app.state.streams = StreamTable()
    app.include_router(chat_router)

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "clients": len(registry)}

    @app.get("/api/models")
    def list_models(provider: Optional[str] = Query(default=None)) -> Dict[str, Any]:
        prov = canonical_provider(provider) if provider else None
        models = [model_to_dict(m) for m in catalog.list_models(prov)]
        return {"ok": True, "provider": prov, "models": models}

    @app.get("/api/keys")
    def get_keys() -> Dict[str, Any]:
        out: Dict[str, Dict[str, Optional[str]]] = {}
        for prov in sorted(ENV_MAP):
            res = keys.get_resolution(prov)
            out[prov] = {"masked": _mask(res.api_key) if res.api_key else None, "source": res.source}
        return {"ok": True, "keys": out}

    @app.post("/api/keys")
    def post_keys(body: KeysBody) -> Dict[str, Any]:
        """Store keys given as ``{ENV_VAR_NAME: value}``; unknown names are skipped."""
        env_to_provider = build_env_to_provider_map()
        updated: List[str] = []
        skipped: List[str] = []
        for env_name, value in body.keys.items():
            prov = env_to_provider.get(env_name)
            candidate = (value or "").strip()
            if prov is None or not acceptable_key(candidate):
                skipped.append(env_name)
                continue
            keys.set_api_key(prov, candidate)
            updated.append(prov)
        log_event(_logger, "service.keys_updated", updated=updated, skipped=skipped)
        return {"ok": True, "updated": updated, "skipped": skipped}

    @app.delete("/api/keys")
    def delete_key(provider: str = Query(...)) -> Dict[str, Any]:
        prov = canonical_provider(provider)
        if not keys.delete_api_key(prov):
            raise HTTPException(status_code=404, detail=f"no stored key for {prov}")
        log_event(_logger, "service.key_deleted", provider=prov)
        return {"ok": True, "deleted": prov}

    @app.exception_handler(ValueError)
    def _value_error(_request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"ok": False, "error": str(exc)})

    return app


__all__ = ["create_app", "CORS_ORIGINS_ENV"]
