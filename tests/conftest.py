"""
Pytest fixtures for epdqplus tests.

Provides a recording fake transport (no network), canned gateway replies
and a valid generic transaction content.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from epdqplus import EPDQPlusGateway, Endpoint, TransportError, TransportResponse

APPROVED_XML = (
    '<?xml version="1.0"?>'
    '<ncresponse orderID="ORDER0001" PAYID="98765" NCSTATUS="0" NCERROR="0" '
    'ACCEPTANCE="1234" STATUS="9" NCERRORPLUS="!" amount="49.95" currency="USD" '
    'PM="CreditCard" BRAND="MasterCard"/>'
)

DECLINED_XML = (
    '<?xml version="1.0"?>'
    '<ncresponse orderID="ORDER0001" PAYID="0" NCSTATUS="3" NCERROR="50001113" '
    'ACCEPTANCE="" STATUS="0" NCERRORPLUS="Not enough money"/>'
)

ELEMENT_APPROVED_XML = (
    "<ncresponse>"
    "<STATUS>9</STATUS><NCERROR>0</NCERROR>"
    "<ACCEPTANCE>1234</ACCEPTANCE><PAYID>98765</PAYID>"
    "<NCERRORPLUS>!</NCERRORPLUS>"
    "</ncresponse>"
)


class FakeTransport:
    """TransportClient that records calls and returns a canned reply."""

    def __init__(
        self,
        body: str = APPROVED_XML,
        *,
        error: Exception | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.body = body
        self.error = error
        self.headers = headers if headers is not None else {"Content-Type": "text/xml"}
        self.calls: list[tuple[Endpoint, dict[str, str]]] = []

    def post(self, endpoint: Endpoint, fields: Mapping[str, str]) -> TransportResponse:
        self.calls.append((endpoint, dict(fields)))
        if self.error is not None:
            raise self.error
        return TransportResponse(body=self.body, status_line="HTTP/1.1 200 OK", headers=self.headers)

    @property
    def last_fields(self) -> dict[str, str]:
        return self.calls[-1][1]


@pytest.fixture()
def content() -> dict[str, Any]:
    return {
        "pspid": "MYSHOP",
        "login": "apiuser",
        "password": "s3cr3t",
        "action": "Normal Authorization",
        "description": "20 English Roses",
        "amount": "49.95",
        "currency": "USD",
        "order_number": "ORDER0001",
        "name": "B Obama",
        "address": "Whitehouse, 1600 Pennsylvania Avenue",
        "city": "Washington DC",
        "zip": "DC 20500",
        "country": "US",
        "phone": "",
        "card_number": "5569510117486571",
        "expiration": "05/15",
        "cvv2": "377",
    }


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def gateway(transport: FakeTransport) -> EPDQPlusGateway:
    return EPDQPlusGateway(transport)


@pytest.fixture()
def declining_gateway() -> EPDQPlusGateway:
    return EPDQPlusGateway(FakeTransport(DECLINED_XML))


@pytest.fixture()
def failing_transport() -> FakeTransport:
    return FakeTransport(error=TransportError("connection refused", host="payments.epdq.co.uk"))


@pytest.fixture()
def approved_xml() -> str:
    return APPROVED_XML


@pytest.fixture()
def declined_xml() -> str:
    return DECLINED_XML


@pytest.fixture()
def element_xml() -> str:
    return ELEMENT_APPROVED_XML


@pytest.fixture()
def make_transport() -> type[FakeTransport]:
    """Return the FakeTransport class for tests that need custom replies."""
    return FakeTransport
