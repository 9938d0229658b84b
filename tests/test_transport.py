"""
Tests for epdqplus.transport.

Uses ``httpx.MockTransport`` so no request leaves the process.
Covers: URL and form encoding, reply capture, error wrapping, and
client ownership.
"""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from epdqplus import (
    PRODUCTION_ENDPOINT,
    TEST_ENDPOINT,
    HttpxTransport,
    TransportClient,
    TransportError,
)


def _client(handler) -> httpx.Client:  # type: ignore[no-untyped-def]
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpxTransportPost:
    def test_posts_form_to_endpoint(self, approved_xml: str) -> None:
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["content_type"] = request.headers["content-type"]
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, text=approved_xml, headers={"Content-Type": "text/xml"})

        transport = HttpxTransport(client=_client(handler))
        reply = transport.post(TEST_ENDPOINT, {"AMOUNT": "4995", "CN": "B Obama"})

        assert seen["method"] == "POST"
        assert seen["url"] == "https://mdepayments.epdq.co.uk/ncol/test/orderdirect.asp"
        assert seen["content_type"] == "application/x-www-form-urlencoded"
        assert seen["form"] == {"AMOUNT": ["4995"], "CN": ["B Obama"]}
        assert reply.body == approved_xml
        assert reply.status_line == "HTTP/1.1 200 OK"
        assert reply.headers["content-type"] == "text/xml"

    def test_error_status_returns_body(self) -> None:
        transport = HttpxTransport(client=_client(lambda request: httpx.Response(500, text="<html/>")))
        reply = transport.post(PRODUCTION_ENDPOINT, {})
        assert reply.body == "<html/>"
        assert reply.status_line == "HTTP/1.1 500 Internal Server Error"

    def test_connection_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(client=_client(handler))
        with pytest.raises(TransportError) as exc_info:
            transport.post(PRODUCTION_ENDPOINT, {"AMOUNT": "4995"})
        assert exc_info.value.host == "payments.epdq.co.uk"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = HttpxTransport(client=_client(handler))
        with pytest.raises(TransportError):
            transport.post(PRODUCTION_ENDPOINT, {})


class TestHttpxTransportLifecycle:
    def test_satisfies_protocol(self) -> None:
        with HttpxTransport() as transport:
            assert isinstance(transport, TransportClient)

    def test_injected_client_not_closed(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<ncresponse/>"))
        with HttpxTransport(client=client):
            pass
        assert client.is_closed is False
        client.close()

    def test_owned_client_closed(self) -> None:
        transport = HttpxTransport(timeout=1.0)
        transport.close()
        assert transport._client.is_closed is True
