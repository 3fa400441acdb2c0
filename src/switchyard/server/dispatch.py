"""Request dispatch.

Drives one request through the states::

    ROUTE_LOOKUP -> CHAIN_EXECUTION -> COMPLETED
                \\                  \\-> FAILED
                 \\-> NOT_FOUND

and returns the response to send. Never raises for a request-level
failure; everything a handler throws becomes a 500.
"""

import enum
import logging
from dataclasses import dataclass

from switchyard.errors import NotFound
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.routing.route import RouteMatch
from switchyard.routing.table import RouteTable
from switchyard.server.chain import run_chain
from switchyard.server.errors import internal_error_response, not_found_response

logger = logging.getLogger("switchyard.server")


class DispatchState(enum.Enum):
    ROUTE_LOOKUP = "route_lookup"
    CHAIN_EXECUTION = "chain_execution"
    COMPLETED = "completed"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Terminal state of a dispatch plus the response to send."""

    state: DispatchState
    response: Response
    match: RouteMatch | None = None
    error: Exception | None = None


async def dispatch(
    table: RouteTable,
    request: Request,
    *,
    stop_on_end: bool = True,
    threaded: bool = False,
) -> DispatchResult:
    """Look up the route for *request* and run its chain."""
    logger.debug("Handling request: %s %s", request.method, request.url)

    # ROUTE_LOOKUP
    try:
        match = table.match(request.method, request.path)
    except NotFound:
        return DispatchResult(DispatchState.NOT_FOUND, not_found_response(request))

    # CHAIN_EXECUTION
    request = request.with_params(match.params)
    response = Response()
    outcome = await run_chain(
        match.route.chain,
        request,
        response,
        stop_on_end=stop_on_end,
        threaded=threaded,
    )

    if outcome.error is not None:
        sent = internal_error_response(
            outcome.error,
            request,
            response,
            handler_index=outcome.failed_at,
        )
        return DispatchResult(DispatchState.FAILED, sent, match=match, error=outcome.error)

    response.finish()
    return DispatchResult(DispatchState.COMPLETED, response, match=match)
