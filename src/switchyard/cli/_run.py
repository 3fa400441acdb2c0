"""``switchyard run`` — serve an app with pounce."""

import argparse
import logging
import sys

from switchyard.cli._resolve import load_app
from switchyard.errors import ConfigurationError

logger = logging.getLogger("switchyard.server")


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it. CLI flags override app config."""
    app = load_app(args.app)

    level = (args.log_level or app.config.log_level).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    host = args.host or app.config.host
    port = args.port if args.port is not None else app.config.port

    from switchyard.server.dev import run_server as serve

    app._ensure_frozen()
    logger.info("Serving %s with %d route(s) on %s:%d", args.app, len(app.routes), host, port)
    try:
        serve(app, host, port, reload=args.reload, app_path=args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
