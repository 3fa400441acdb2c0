"""Switchyard — pattern routes and handler chains over ASGI.

Basic usage::

    from switchyard import App

    app = App()

    def log_request(request, response):
        print(request.method, request.path)

    app.use(log_request)

    @app.get("/posts/:id")
    def show_post(request, response):
        response.json({"id": request.params["id"]})

    app.listen(3000, lambda: print("ready"))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "Method",
    "NotFound",
    "Request",
    "Response",
    "ResponseAlreadySent",
    "ResponseSerializationError",
    "SwitchyardError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name == "App":
        from switchyard.app import App

        return App

    if name == "AppConfig":
        from switchyard.config import AppConfig

        return AppConfig

    if name in ("Request", "Response"):
        from switchyard import http as _http

        return getattr(_http, name)

    if name == "Method":
        from switchyard.routing.route import Method

        return Method

    if name in (
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "ResponseAlreadySent",
        "ResponseSerializationError",
        "SwitchyardError",
    ):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
