"""Invoke helpers — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler goes through ``invoke`` so the sync/async check
lives in exactly one place.

Usage::

    from switchyard._internal.invoke import invoke

    await invoke(handler, request, response)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, threaded: bool = False, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    With ``threaded=True``, plain (non-coroutine) functions run in a
    worker thread via ``anyio.to_thread.run_sync`` so a blocking handler
    does not stall the event loop. Coroutine functions always run on
    the loop.
    """
    if threaded and not inspect.iscoroutinefunction(handler):
        result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    else:
        result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
