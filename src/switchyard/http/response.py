"""Mutable HTTP response sink.

Handlers receive a ``Response`` and write into it: status, headers,
body, then ``end()``. Nothing reaches the wire until the dispatcher
finishes the chain, so a failing chain can still be turned into a
clean error response, as long as no handler ended the response first.
"""

import json as json_module
from typing import Any

from switchyard.errors import ResponseAlreadySent, ResponseSerializationError

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class Response:
    """Response sink handed to every handler of a chain.

    Usage::

        def show(request, response):
            response.status = 201
            response.set_header("X-Request-Id", "abc")
            response.end("created")

        def show_json(request, response):
            response.json({"id": request.params["id"]})

    Any mutation after ``end()`` raises ``ResponseAlreadySent``.
    """

    __slots__ = ("_body", "_ended", "_headers", "_status")

    def __init__(self, status: int = 200) -> None:
        self._status = status
        # Ordered (original-case name, value) pairs; lookups are case-insensitive
        self._headers: list[tuple[str, str]] = []
        self._body: list[bytes] = []
        self._ended = False

    def __repr__(self) -> str:
        state = "ended" if self._ended else "open"
        return f"<Response {self._status} {state} {len(self.body)} bytes>"

    # -- State --

    @property
    def ended(self) -> bool:
        """True once ``end()`` or ``json()`` completed."""
        return self._ended

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        self._check_open()
        if not 100 <= value <= 599:
            msg = f"Invalid HTTP status code: {value}"
            raise ValueError(msg)
        self._status = value

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)

    @property
    def body(self) -> bytes:
        return b"".join(self._body)

    # -- Headers --

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing value with the same name."""
        self._check_open()
        self._drop_header(name)
        self._headers.append((name, value))

    def add_header(self, name: str, value: str) -> None:
        """Append a header without replacing existing values."""
        self._check_open()
        self._headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self._headers:
            if key.lower() == lowered:
                return value
        return None

    def remove_header(self, name: str) -> None:
        self._check_open()
        self._drop_header(name)

    # -- Body --

    def write(self, chunk: str | bytes) -> None:
        """Buffer a body chunk without ending the response."""
        self._check_open()
        self._body.append(_encode(chunk))

    def end(self, body: str | bytes | None = None) -> None:
        """Append an optional final chunk and mark the response finished."""
        self._check_open()
        if body is not None:
            self._body.append(_encode(body))
        if self.get_header("content-type") is None and self._body:
            self._headers.append(("Content-Type", TEXT_CONTENT_TYPE))
        self._ended = True

    def json(self, value: Any, *, status: int | None = None) -> None:
        """Serialize *value* as JSON, set the content type, and end.

        Raises ``ResponseSerializationError`` (leaving the response
        untouched) when *value* cannot be represented as JSON.
        """
        self._check_open()
        try:
            payload = json_module.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as exc:
            msg = f"Cannot serialize {type(value).__name__} as JSON: {exc}"
            raise ResponseSerializationError(msg) from exc
        if status is not None:
            self.status = status
        self.set_header("Content-Type", JSON_CONTENT_TYPE)
        self.end(payload)

    # -- Dispatcher hooks --

    def finish(self) -> None:
        """End the response if no handler did. Idempotent."""
        if not self._ended:
            self.end()

    @classmethod
    def error(cls, status: int, body: str) -> "Response":
        """Build an ended plain-text response with a fixed body."""
        response = cls(status)
        response.end(body)
        return response

    # -- Internal --

    def _check_open(self) -> None:
        if self._ended:
            msg = "Response has already been sent"
            raise ResponseAlreadySent(msg)

    def _drop_header(self, name: str) -> None:
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]


def _encode(chunk: str | bytes) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else chunk
