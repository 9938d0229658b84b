"""
epdqplus.gateway
~~~~~~~~~~~~~~~~
Barclaycard ePDQ+ Direct Link adapter.

:class:`EPDQPlusGateway` turns a generic transaction into an
``orderdirect.asp`` request, posts it through a :class:`TransportClient`
and records the outcome on the transaction's :class:`FieldStore`.

Only normal authorization (operation ``SAL``) is supported end to end.

Usage::

    from epdqplus import EPDQPlusGateway, HttpxTransport, Transaction

    gateway = EPDQPlusGateway(HttpxTransport())
    gateway.configure(test=True)

    tx = Transaction(
        pspid="MYSHOP", login="apiuser", password="secret",
        shasign="SHA-IN pass phrase",
        action="Normal Authorization", amount="49.95", currency="USD",
        card_number="5569510117486571", expiration="05/15", cvv2="377",
    )
    result = gateway.submit(tx)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from epdqplus import __version__
from epdqplus.config import Settings
from epdqplus.fields import check_required, map_fields, normalize_content
from epdqplus.models import (
    PRODUCTION_ENDPOINT,
    TEST_ENDPOINT,
    Endpoint,
    FailureStatus,
    GatewayInfo,
    GatewayResponse,
    TransactionResult,
)
from epdqplus.redaction import redact_fields
from epdqplus.response import parse_response
from epdqplus.signing import compute_shasign
from epdqplus.transaction import FieldStore
from epdqplus.transport import HttpxTransport, TransportClient, TransportResponse

logger = logging.getLogger(__name__)

GATEWAY_NAME = "Barclaycard EPDQ+ API Direct Link"
GATEWAY_URL = "http://www.barclaycard.co.uk/business/accepting-payments/epdq-ecomm/extraplus/"


class EPDQPlusGateway:
    """Direct Link adapter bound to one transport.

    The gateway holds no per-transaction state; one instance can serve
    any number of sequential submissions.
    """

    def __init__(self, transport: TransportClient, *, test: bool = False) -> None:
        self.transport = transport
        self._endpoint = PRODUCTION_ENDPOINT
        self.configure(test=test)

    @classmethod
    def from_settings(cls, settings: Settings) -> EPDQPlusGateway:
        """Build a gateway with an :class:`HttpxTransport` from *settings*."""
        return cls(HttpxTransport(timeout=settings.HTTP_TIMEOUT), test=settings.EPDQ_TEST_MODE)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def is_test(self) -> bool:
        return self._endpoint == TEST_ENDPOINT

    def configure(self, test: bool) -> None:
        """Point the gateway at the test (``True``) or production server."""
        self._endpoint = TEST_ENDPOINT if test else PRODUCTION_ENDPOINT

    def test_transaction(self, test: bool) -> None:
        """Alias of :meth:`configure` using the host framework's name."""
        self.configure(test)

    def info(self) -> GatewayInfo:
        return GatewayInfo(
            gateway_name=GATEWAY_NAME,
            gateway_url=GATEWAY_URL,
            module_version=__version__,
            supported_types=["CC"],
            token_support=False,
            test_transaction=True,
            supported_actions=["Normal Authorization"],
        )

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def normalize(self, content: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        """Resolve the action and reformat amount and expiration in place.

        Raises:
            InvalidAmountFormatError: If ``amount`` is not ``-?digits.dd``.
            InvalidExpirationFormatError: If ``expiration`` is not ``MM/YY``.
        """
        return normalize_content(content)

    def build_request(self, content: Mapping[str, Any]) -> dict[str, str]:
        """Return the form fields to post for already-normalized *content*.

        When ``shasign`` is set, the request is signed and the signature
        replaces the pass phrase in the ``SHASIGN`` field.

        Raises:
            MissingRequiredFieldError: If a required field is absent or empty.
        """
        check_required(content)
        post_data = map_fields(content)

        secret = content.get("shasign")
        if secret is not None and str(secret) != "":
            logger.debug(
                "Signing request",
                extra={"signed_fields": sorted(k for k, v in post_data.items() if v != "")},
            )
            post_data["SHASIGN"] = compute_shasign(post_data, str(secret))

        return post_data

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, transaction: FieldStore) -> TransactionResult:
        """Run the full normalize, build, post and interpret pipeline.

        The result is recorded on *transaction* and also returned.  A
        decline is a normal result (``is_success=False``), not an error.
        Normalization works on a copy, so the stored content stays as
        given and the same transaction can be submitted again.

        Raises:
            RequestValidationError: If the content is invalid; nothing is sent.
            TransportError: If the gateway could not be reached.
            MalformedResponseError: If the reply is not XML.
        """
        content = self.normalize(transaction.content())
        post_data = self.build_request(content)

        logger.info(
            "Submitting transaction",
            extra={
                "host": self._endpoint.host,
                "operation": post_data.get("OPERATION"),
                "order_id": post_data.get("ORDERID"),
                "signed": "SHASIGN" in post_data,
            },
        )
        logger.debug("Post data", extra={"post_data": redact_fields(post_data)})

        reply = self.transport.post(self._endpoint, post_data)
        response = parse_response(reply.body)
        result = self._interpret(response, reply)

        transaction.record_result(result)
        return result

    def _interpret(self, response: GatewayResponse, reply: TransportResponse) -> TransactionResult:
        if response.is_approved:
            logger.info(
                "Transaction approved",
                extra={"payid": response.payid, "acceptance": response.acceptance},
            )
            return TransactionResult(
                is_success=True,
                result_code=response.acceptance,
                authorization=response.payid,
                server_response=reply.body,
                status_line=reply.status_line,
                response_headers=reply.headers,
            )

        error_message = (
            f"Failed: Status: {response.status or ''}, "
            f"Error: {response.ncerror or ''}, "
            f"Message:{response.ncerrorplus or ''}"
        )
        logger.info(
            "Transaction declined",
            extra={"status": response.status, "ncerror": response.ncerror},
        )
        return TransactionResult(
            is_success=False,
            result_code=response.acceptance,
            error_message=error_message,
            failure_status=FailureStatus.DECLINED,
            server_response=reply.body,
            status_line=reply.status_line,
            response_headers=reply.headers,
        )
