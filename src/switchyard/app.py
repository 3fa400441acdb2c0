"""Switchyard application class.

Mutable during setup (middleware and route registration).
Frozen at runtime when ``app.listen()`` or ``__call__()`` is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.types import Handler
from switchyard.config import AppConfig
from switchyard.routing.route import Method, Route
from switchyard.routing.table import RouteTable
from switchyard.server.handler import handle_request

logger = logging.getLogger("switchyard.server")


class App:
    """The switchyard application.

    Routes map a method and a path pattern to a chain of handlers. Each
    handler is called as ``handler(request, response)``::

        app = App()
        app.use(log_request)
        app.get("/posts/:id", load_post, show_post)

        @app.post("/posts")
        def create_post(request, response):
            response.json({"ok": True}, status=201)

    Global middleware registered with ``use()`` is copied to the front of
    every chain registered *after* it. Middleware added later never
    reaches routes that were registered earlier.

    Thread safety:
        The setup phase is single-threaded (registration at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the route table, even if several server workers
        call ``__call__()`` concurrently on the first request. After the
        freeze the table is read-only and registration raises
        ``RuntimeError``.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = RouteTable()
        self._middleware: list[Handler] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Middleware --

    def use(self, *handlers: Handler) -> None:
        """Append global middleware for routes registered from now on."""
        self._check_not_frozen()
        self._middleware.extend(handlers)

    @property
    def middleware(self) -> tuple[Handler, ...]:
        return tuple(self._middleware)

    # -- Route registration --

    def route(self, method: str | Method, pattern: str, *handlers: Handler) -> Any:
        """Register *handlers* under ``(method, pattern)``.

        The chain stored is the current global middleware followed by
        *handlers*. Registering the same method and pattern again appends
        another such chain segment.

        Called without handlers, returns a decorator::

            @app.route("GET", "/health")
            def health(request, response):
                response.end("ok")
        """
        if not handlers:

            def decorator(func: Handler) -> Handler:
                self._register(method, pattern, (func,))
                return func

            return decorator

        self._register(method, pattern, handlers)
        return None

    def get(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.GET, pattern, *handlers)

    def post(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.POST, pattern, *handlers)

    def put(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.PUT, pattern, *handlers)

    def patch(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.PATCH, pattern, *handlers)

    def delete(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.DELETE, pattern, *handlers)

    def head(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.HEAD, pattern, *handlers)

    def options(self, pattern: str, *handlers: Handler) -> Any:
        return self.route(Method.OPTIONS, pattern, *handlers)

    @property
    def routes(self) -> list[Route]:
        """Registered routes with their full chains, for introspection."""
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once when the server starts (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run once when the server stops (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    def listen(
        self,
        port: int | None = None,
        on_ready: Callable[[], Any] | None = None,
        *,
        host: str | None = None,
    ) -> None:
        """Freeze the app and serve it until the process is stopped.

        *on_ready* runs after the server has started and all startup
        hooks have completed.
        """
        if on_ready is not None:
            self.on_startup(on_ready)
        self._ensure_frozen()

        from switchyard.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port if port is not None else self.config.port,
        )

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve on the configured host and port."""
        self.listen(port, host=host)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, table=self._table, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs the registered hooks and signals completion to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self._run_hooks(self._shutdown_hooks)
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _register(self, method: str | Method, pattern: str, handlers: tuple[Handler, ...]) -> None:
        self._check_not_frozen()
        self._table.register(method, pattern, [*self._middleware, *handlers])

    async def _run_hooks(self, hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table. MUST only be called while holding _freeze_lock."""
        self._table.freeze()
        self._frozen = True
        logger.debug("App frozen with %d route(s)", len(self._table.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.listen()."
            )
            raise RuntimeError(msg)
