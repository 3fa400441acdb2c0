"""Tests for switchyard.http.request — the immutable request view."""

from typing import Any

import pytest

from switchyard.errors import HTTPError
from switchyard.http.headers import Headers
from switchyard.http.request import Request


def _scope(**overrides: Any) -> dict[str, Any]:
    base: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _receive_chunks(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ]

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    return receive


class TestFromAsgi:
    def test_basic_fields(self) -> None:
        request = Request.from_asgi(
            _scope(method="POST", path="/users/42", query_string=b"a=1&a=2"),
            _receive_chunks(b""),
        )
        assert request.method == "POST"
        assert request.path == "/users/42"
        assert request.query.get_list("a") == ["1", "2"]
        assert request.url == "/users/42?a=1&a=2"
        assert request.server == ("localhost", 8000)
        assert request.client == ("127.0.0.1", 54321)
        assert request.params == {}

    def test_method_is_kept_as_sent(self) -> None:
        request = Request.from_asgi(_scope(method="get"), _receive_chunks(b""))
        assert request.method == "get"

    def test_path_comes_from_raw_path(self) -> None:
        request = Request.from_asgi(
            _scope(path="/files/a/b", raw_path=b"/files/a%2Fb"),
            _receive_chunks(b""),
        )
        assert request.path == "/files/a%2Fb"

    def test_raw_path_query_string_is_dropped(self) -> None:
        request = Request.from_asgi(
            _scope(path="/a", raw_path=b"/a?x=1", query_string=b"x=1"),
            _receive_chunks(b""),
        )
        assert request.path == "/a"
        assert request.url == "/a?x=1"

    def test_path_without_raw_path(self) -> None:
        request = Request.from_asgi(_scope(path="/plain"), _receive_chunks(b""))
        assert request.path == "/plain"

    def test_headers(self) -> None:
        request = Request.from_asgi(
            _scope(headers=[(b"content-type", b"application/json")]),
            _receive_chunks(b""),
        )
        assert request.content_type == "application/json"
        assert request.headers["Content-Type"] == "application/json"

    def test_frozen(self) -> None:
        request = Request(method="GET", path="/")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    def test_with_params_shares_body_cache(self) -> None:
        request = Request(method="GET", path="/u/1")
        request._cache["_body"] = b"cached"
        bound = request.with_params({"id": "1"})
        assert bound.params == {"id": "1"}
        assert request.params == {}
        assert bound._cache is request._cache


class TestBody:
    async def test_reads_all_chunks(self) -> None:
        request = Request.from_asgi(_scope(), _receive_chunks(b"hel", b"lo"))
        assert await request.body() == b"hello"
        # cached; receive is not called again
        assert await request.text() == "hello"

    async def test_json(self) -> None:
        request = Request.from_asgi(_scope(), _receive_chunks(b'{"a": 1}'))
        assert await request.json() == {"a": 1}

    async def test_too_large(self) -> None:
        request = Request.from_asgi(
            _scope(),
            _receive_chunks(b"12345", b"67890"),
            max_body_size=8,
        )
        with pytest.raises(HTTPError) as exc_info:
            await request.body()
        assert exc_info.value.status == 413

    async def test_default_request_has_empty_body(self) -> None:
        assert await Request(method="GET", path="/").body() == b""


class TestHeaders:
    def test_from_dict_is_case_insensitive(self) -> None:
        headers = Headers.from_dict({"X-Token": "abc"})
        assert headers["x-token"] == "abc"
        assert "X-TOKEN" in headers
        assert dict(headers) == {"x-token": "abc"}

    def test_get_list(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers.get_list("accept") == ["a", "b"]
        assert len(headers) == 1
        assert headers.get("missing") is None
