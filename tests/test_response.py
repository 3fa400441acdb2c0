"""Tests for switchyard.http.response — the mutable response sink."""

import math

import pytest

from switchyard.errors import ResponseAlreadySent, ResponseSerializationError
from switchyard.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.headers == ()
        assert response.body == b""
        assert response.ended is False

    def test_status_setter(self) -> None:
        response = Response()
        response.status = 404
        assert response.status == 404

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Invalid HTTP status"):
            Response().status = 42

    def test_set_header_replaces_case_insensitively(self) -> None:
        response = Response()
        response.set_header("X-Thing", "a")
        response.set_header("x-thing", "b")
        assert response.headers == (("x-thing", "b"),)
        assert response.get_header("X-THING") == "b"

    def test_add_header_keeps_existing(self) -> None:
        response = Response()
        response.add_header("Set-Cookie", "a=1")
        response.add_header("Set-Cookie", "b=2")
        assert len(response.headers) == 2

    def test_remove_header(self) -> None:
        response = Response()
        response.set_header("X-Thing", "a")
        response.remove_header("x-thing")
        assert response.get_header("X-Thing") is None

    def test_write_then_end(self) -> None:
        response = Response()
        response.write("Hello, ")
        response.end(b"World")
        assert response.body == b"Hello, World"
        assert response.ended is True

    def test_end_sets_text_content_type(self) -> None:
        response = Response()
        response.end("hi")
        assert response.get_header("Content-Type") == "text/plain; charset=utf-8"

    def test_end_keeps_explicit_content_type(self) -> None:
        response = Response()
        response.set_header("Content-Type", "text/html")
        response.end("<p>hi</p>")
        assert response.get_header("content-type") == "text/html"

    def test_empty_end_sets_no_content_type(self) -> None:
        response = Response()
        response.end()
        assert response.get_header("content-type") is None

    def test_error_factory(self) -> None:
        response = Response.error(404, "Not Found")
        assert response.status == 404
        assert response.body == b"Not Found"
        assert response.ended is True

    def test_finish_is_idempotent(self) -> None:
        response = Response()
        response.end("x")
        response.finish()
        assert response.body == b"x"


class TestJson:
    def test_serializes_and_ends(self) -> None:
        response = Response()
        response.json({"id": "42", "tags": ["a"]})
        assert response.get_header("Content-Type") == "application/json"
        assert response.body == b'{"id": "42", "tags": ["a"]}'
        assert response.ended is True

    def test_status_argument(self) -> None:
        response = Response()
        response.json([], status=201)
        assert response.status == 201

    def test_unserializable_value(self) -> None:
        response = Response()
        with pytest.raises(ResponseSerializationError, match="Cannot serialize object"):
            response.json(object())
        assert response.ended is False
        assert response.get_header("Content-Type") is None

    def test_nan_is_rejected(self) -> None:
        with pytest.raises(ResponseSerializationError):
            Response().json({"x": math.nan})

    def test_circular_reference_is_rejected(self) -> None:
        data: dict[str, object] = {}
        data["self"] = data
        with pytest.raises(ResponseSerializationError):
            Response().json(data)


class TestAlreadySent:
    @pytest.mark.parametrize(
        "write",
        [
            lambda r: r.end("again"),
            lambda r: r.write("more"),
            lambda r: r.json({}),
            lambda r: r.set_header("X-Late", "1"),
            lambda r: setattr(r, "status", 500),
        ],
    )
    def test_mutation_after_end(self, write) -> None:
        response = Response()
        response.end("done")
        with pytest.raises(ResponseAlreadySent):
            write(response)
        assert response.body == b"done"
        assert response.status == 200
