"""Fixed error responses for the dispatcher.

Both bodies are literal text; the detail of the underlying exception
only goes to the log.
"""

import logging

from switchyard.errors import InternalServerError, NotFound, ResponseAlreadySent
from switchyard.http.request import Request
from switchyard.http.response import Response

logger = logging.getLogger("switchyard.server")

NOT_FOUND_BODY = NotFound().detail
INTERNAL_ERROR_BODY = InternalServerError().detail


def not_found_response(request: Request) -> Response:
    logger.debug("404 %s %s", request.method, request.path)
    return Response.error(404, NOT_FOUND_BODY)


def internal_error_response(
    exc: Exception,
    request: Request,
    committed: Response,
    *,
    handler_index: int | None = None,
) -> Response:
    """Turn a chain failure into the response to send.

    If an earlier handler already ended *committed*, that response stands
    and the failure is only logged: a sent response cannot be rewritten.
    """
    if committed.ended:
        # A double write carries no useful traceback; anything else does.
        logger.error(
            "%s %s: handler %s failed after the response was sent (%s: %s); "
            "keeping the sent response",
            request.method,
            request.path,
            handler_index,
            type(exc).__name__,
            exc,
            exc_info=None if isinstance(exc, ResponseAlreadySent) else exc,
        )
        return committed

    logger.error(
        "500 %s %s (handler %s)",
        request.method,
        request.path,
        handler_index,
        exc_info=exc,
    )
    return Response.error(500, INTERNAL_ERROR_BODY)
