# -*- coding: utf-8 -*-

"""
Unit tests for request access helpers and the Starlette adapter.
"""

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from reqcheck.request import (
    ValidationRequest,
    append_errors,
    get_errors,
    get_location,
)


def _starlette_request(body: bytes, content_type: str, query_string: bytes = b"") -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/users/42",
        "query_string": query_string,
        "headers": [
            (b"content-type", content_type.encode()),
            (b"cookie", b"session=abc"),
            (b"X-Token", b"secret"),
        ],
        "path_params": {"id": "42"},
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class TestRequestAccess:
    """Tests for location and accumulator helpers."""

    def test_get_location_from_mapping_and_object(self):
        assert get_location({"body": {"a": 1}}, "body") == {"a": 1}
        assert get_location(SimpleNamespace(query={"b": 2}), "query") == {"b": 2}
        assert get_location({}, "cookies") is None

    def test_append_errors_creates_accumulator(self):
        """
        What it does: Verifies the accumulator is created on first use.
        Purpose: Chains work on plain objects without setup.
        """
        req = SimpleNamespace(body={})

        append_errors(req, ["e1"])
        append_errors(req, ["e2"])

        assert req.validation_errors == ["e1", "e2"]
        assert get_errors(req) == ["e1", "e2"]

    def test_get_errors_without_accumulator(self):
        assert get_errors({}) == []


class TestFromStarlette:
    """Tests for ValidationRequest.from_starlette()."""

    @pytest.mark.asyncio
    async def test_copies_every_location(self):
        """
        What it does: Verifies body, cookies, headers, params and query are copied.
        Purpose: Chains see the same shape for every FastAPI request.
        """
        request = _starlette_request(
            json.dumps({"name": "x"}).encode(),
            "application/json",
            b"a=1&tag=x&tag=y",
        )

        req = await ValidationRequest.from_starlette(request)

        print(f"Request: {req}")
        assert req.body == {"name": "x"}
        assert req.cookies == {"session": "abc"}
        assert req.headers["x-token"] == "secret"
        assert req.params == {"id": "42"}
        assert req.query == {"a": "1", "tag": ["x", "y"]}
        assert req.validation_errors == []

    @pytest.mark.asyncio
    async def test_undecodable_json_gives_empty_body(self):
        request = _starlette_request(b"{not json", "application/json")

        req = await ValidationRequest.from_starlette(request)

        assert req.body == {}

    @pytest.mark.asyncio
    async def test_form_body(self):
        request = _starlette_request(b"name=x&tag=a&tag=b", "application/x-www-form-urlencoded")

        req = await ValidationRequest.from_starlette(request)

        assert req.body == {"name": "x", "tag": ["a", "b"]}

    @pytest.mark.asyncio
    async def test_other_content_types_give_empty_body(self):
        request = _starlette_request(b"hello", "text/plain")

        req = await ValidationRequest.from_starlette(request)

        assert req.body == {}
