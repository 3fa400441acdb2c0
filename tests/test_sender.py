"""Tests for switchyard.server.sender response emission rules."""

from typing import Any

import pytest

from switchyard.http.response import Response
from switchyard.server.sender import send_response


async def _send(response: Response, method: str = "GET") -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send, method=method)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_200_preserves_body(self) -> None:
        messages = await _send(Response.error(200, "ok"))

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    @pytest.mark.asyncio
    async def test_header_names_are_lowercased(self) -> None:
        response = Response()
        response.set_header("X-Request-Id", "abc")
        response.end()
        messages = await _send(response)
        assert (b"x-request-id", b"abc") in messages[0]["headers"]

    @pytest.mark.asyncio
    async def test_handler_content_length_is_replaced(self) -> None:
        response = Response()
        response.set_header("Content-Length", "999")
        response.end("abc")
        messages = await _send(response)
        lengths = [v for k, v in messages[0]["headers"] if k == b"content-length"]
        assert lengths == [b"3"]

    @pytest.mark.asyncio
    async def test_204_drops_body(self) -> None:
        messages = await _send(Response.error(204, "unexpected"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_head_keeps_length_drops_body(self) -> None:
        messages = await _send(Response.error(200, "hello"), method="HEAD")
        assert dict(messages[0]["headers"])[b"content-length"] == b"5"
        assert messages[1]["body"] == b""
