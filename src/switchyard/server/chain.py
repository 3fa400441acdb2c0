"""Handler chain execution.

Runs the handlers of a matched route one after another with the same
request and response. The first exception aborts the chain.
"""

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler
from switchyard.http.request import Request
from switchyard.http.response import Response

logger = logging.getLogger("switchyard.server")


class ChainStatus(enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ChainOutcome:
    """How a chain run ended.

    ``ran`` counts handlers that were invoked, including a failing one.
    ``error`` and ``failed_at`` are set exactly when the status is FAILED.
    """

    status: ChainStatus
    ran: int
    error: Exception | None = None
    failed_at: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is ChainStatus.COMPLETED


async def run_chain(
    chain: Sequence[Handler],
    request: Request,
    response: Response,
    *,
    stop_on_end: bool = True,
    threaded: bool = False,
) -> ChainOutcome:
    """Invoke each handler in *chain* with ``(request, response)``.

    With ``stop_on_end`` the chain stops after the handler that ended
    the response. Without it every handler runs, and a handler writing
    to an ended response fails with ``ResponseAlreadySent``.
    """
    ran = 0
    for index, handler in enumerate(chain):
        if stop_on_end and response.ended:
            logger.debug(
                "Response ended by handler %d of %d; skipping the rest of the chain",
                index,
                len(chain),
            )
            break
        ran += 1
        try:
            await invoke(handler, request, response, threaded=threaded)
        except Exception as exc:
            return ChainOutcome(ChainStatus.FAILED, ran=ran, error=exc, failed_at=index)
    return ChainOutcome(ChainStatus.COMPLETED, ran=ran)
