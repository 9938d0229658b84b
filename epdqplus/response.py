"""
epdqplus.response
~~~~~~~~~~~~~~~~~
Parsing of ``orderdirect.asp`` replies.

The gateway answers with a single ``<ncresponse>`` element whose
attributes carry the status fields::

    <ncresponse orderID="ORDER0001" PAYID="98765" NCSTATUS="0"
                NCERROR="0" ACCEPTANCE="1234" STATUS="9"
                NCERRORPLUS="!" amount="49.95" currency="USD"/>

Child elements of the root with the same names are accepted as well;
an attribute wins when both are present.
"""

from __future__ import annotations

import logging
from xml.etree import ElementTree

from epdqplus.errors import MalformedResponseError
from epdqplus.models import GatewayResponse

logger = logging.getLogger(__name__)

RESPONSE_FIELDS: tuple[str, ...] = ("STATUS", "NCERROR", "ACCEPTANCE", "PAYID", "NCERRORPLUS")


def _field_value(root: ElementTree.Element, name: str) -> str | None:
    value = root.get(name)
    if value is not None:
        return value
    return root.findtext(name)


def parse_response(body: str | bytes) -> GatewayResponse:
    """Parse a raw response body into a :class:`GatewayResponse`.

    Raises:
        MalformedResponseError: If *body* is not well-formed XML.
    """
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as exc:
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        logger.warning("Unparseable gateway response", extra={"error": str(exc), "size": len(text)})
        raise MalformedResponseError(f"Gateway response is not valid XML: {exc}", body=text) from exc

    return GatewayResponse.model_validate({name: _field_value(root, name) for name in RESPONSE_FIELDS})
