"""``switchyard routes`` — list registered routes.

Prints one row per route in lookup order with the full handler chain,
global middleware included.
"""

import argparse

from switchyard.cli._resolve import load_app


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATTERN / CHAIN table for ``args.app``."""
    app = load_app(args.app)

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.method.value, route.pattern, " -> ".join(_handler_name(h) for h in route.chain))
        for route in routes
    ]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_pattern = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

    fmt = f"{{:<{max_method}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "CHAIN"))
    sep_len = max_method + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
