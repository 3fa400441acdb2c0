"""Switchyard exception hierarchy.

Shared across the route table, dispatcher, response sink, and App so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when routes or app configuration are invalid.

    Always raised at registration time, never while serving.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no registered pattern matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class InternalServerError(HTTPError):
    """500 — a handler in the matched chain raised."""

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)


class ResponseError(SwitchyardError):
    """Base for misuse of the response sink."""


class ResponseAlreadySent(ResponseError):  # noqa: N818
    """The response was written to after it had been ended."""


class ResponseSerializationError(ResponseError):
    """``Response.json()`` was given a value JSON cannot represent."""
