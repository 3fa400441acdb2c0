"""Serve an app with pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``), but
``App.listen()`` has a live App object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

from __future__ import annotations

import logging

from switchyard.errors import ConfigurationError

logger = logging.getLogger("switchyard.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Start a single-worker pounce server for *app* and block.

    Args:
        app: ASGI callable (switchyard App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes (requires *app_path*).
        app_path: Optional ``"module:attribute"`` import string so pounce
            can reimport the app on each reload cycle.

    Raises ``ConfigurationError`` if pounce is not installed.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "Serving requires the 'bengal-pounce' package (Python 3.14+). "
            "Install it with: pip install switchyard[server]"
        )
        raise ConfigurationError(msg) from None

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload and app_path is not None,
    )
    logger.info("Serving on http://%s:%d", host, port)
    server = Server(config, app, app_path=app_path)
    server.run()
