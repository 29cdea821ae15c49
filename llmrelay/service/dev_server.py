from __future__ import annotations

import os

import uvicorn

from ..config.defaults import SERVICE_DEFAULT_HOST, SERVICE_DEFAULT_PORT

HOST_ENV = "LLMRELAY_SERVICE_HOST"
PORT_ENV = "LLMRELAY_SERVICE_PORT"
RELOAD_ENV = "LLMRELAY_SERVICE_RELOAD"
APP_FACTORY = "llmrelay.service.app:create_app"


def _parse_port(value: str | None, default: int) -> int:
    """Parse a port number, falling back to ``default`` on junk input."""
    if not value:
        return default
    try:
        port = int(value)
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


def main() -> None:
    """Serve ``llmrelay.service.app:create_app`` with uvicorn.

    The application is built by uvicorn through the factory, so nothing is
    constructed when the app module is imported.

    - LLMRELAY_SERVICE_HOST: interface to bind (default 127.0.0.1)
    - LLMRELAY_SERVICE_PORT: port to bind (default 8091)
    - LLMRELAY_SERVICE_RELOAD: "true" enables auto-reload (default off)
    """
    host = os.getenv(HOST_ENV, SERVICE_DEFAULT_HOST)
    port = _parse_port(os.getenv(PORT_ENV), SERVICE_DEFAULT_PORT)
    reload_enabled = (os.getenv(RELOAD_ENV) or "").strip().lower() == "true"

    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
