"""ASGI handler — translates ASGI scope/messages to switchyard types.

The only component besides the test client that touches raw ASGI.
Builds a Request from the scope, dispatches it through the route table,
and sends the resulting Response back through ``send()``.
"""

import logging
import time

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard.config import AppConfig
from switchyard.http.request import Request
from switchyard.routing.table import RouteTable
from switchyard.server.dispatch import DispatchResult, dispatch
from switchyard.server.sender import send_response

logger = logging.getLogger("switchyard.server")
access_logger = logging.getLogger("switchyard.access")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    config: AppConfig,
) -> DispatchResult | None:
    """Process a single HTTP request through route lookup and chain execution."""
    if scope["type"] != "http":
        return None

    request = Request.from_asgi(scope, receive, max_body_size=config.max_body_size)
    start = time.perf_counter()

    result = await dispatch(
        table,
        request,
        stop_on_end=config.stop_on_end,
        threaded=config.threaded_handlers,
    )
    await send_response(result.response, send, method=request.method)

    if config.access_log:
        elapsed_ms = (time.perf_counter() - start) * 1000
        access_logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url,
            result.response.status,
            elapsed_ms,
        )
    return result
