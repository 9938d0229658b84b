"""
epdqplus
~~~~~~~~
Barclaycard ePDQ+ Direct Link adapter.

Public surface
--------------
All public symbols are re-exported from the top-level namespace::

    # Preferred
    from epdqplus import EPDQPlusGateway, Transaction

    # Also valid but discouraged
    from epdqplus.gateway import EPDQPlusGateway

Sub-module summary
------------------
:mod:`epdqplus.gateway`
    :class:`EPDQPlusGateway` - normalize, build, sign, post, interpret.

:mod:`epdqplus.fields`
    Field, action and whitelist tables; amount and expiry conversion.

:mod:`epdqplus.signing`
    SHA-512 ``SHASIGN`` computation.

:mod:`epdqplus.response`
    ``orderdirect.asp`` XML reply parsing.

:mod:`epdqplus.transport`
    :class:`TransportClient` Protocol and :class:`HttpxTransport`.

:mod:`epdqplus.transaction`
    :class:`FieldStore` Protocol and :class:`Transaction`.

:mod:`epdqplus.models`
    Pydantic v2 models (TransactionResult, GatewayResponse, ...).

:mod:`epdqplus.errors`
    Exception hierarchy rooted at :exc:`EPDQError`.
"""

from __future__ import annotations

__version__: str = "0.2.0"

# --- Exceptions -------------------------------------------------------------
from epdqplus.errors import (
    EPDQError,
    InvalidAmountFormatError,
    InvalidExpirationFormatError,
    MalformedResponseError,
    MissingRequiredFieldError,
    RequestValidationError,
    TransportError,
)

# --- Field tables -----------------------------------------------------------
from epdqplus.fields import (
    ACTION_MAP,
    FIELD_MAP,
    POST_FIELDS,
    REQUIRED_FIELDS,
    amount_to_minor_units,
    expiration_to_mmyy,
    normalize_content,
)

# --- Gateway ----------------------------------------------------------------
from epdqplus.gateway import EPDQPlusGateway

# --- Logging ----------------------------------------------------------------
from epdqplus.logging import SENSITIVE_KEYS, JsonFormatter, configure_logging

# --- Models & enumerations --------------------------------------------------
from epdqplus.models import (
    PRODUCTION_ENDPOINT,
    TEST_ENDPOINT,
    Endpoint,
    FailureStatus,
    GatewayInfo,
    GatewayResponse,
    Operation,
    TransactionResult,
)

# --- Redaction --------------------------------------------------------------
from epdqplus.redaction import REDACT_KEYS, mask_card_number, redact_fields, redact_value

# --- Response & signing -----------------------------------------------------
from epdqplus.response import parse_response
from epdqplus.signing import compute_shasign, signing_buffer

# --- Storage & transport ----------------------------------------------------
from epdqplus.transaction import FieldStore, Transaction
from epdqplus.transport import HttpxTransport, TransportClient, TransportResponse

__all__: list[str] = [
    # Gateway
    "EPDQPlusGateway",
    # Errors
    "EPDQError",
    "InvalidAmountFormatError",
    "InvalidExpirationFormatError",
    "MalformedResponseError",
    "MissingRequiredFieldError",
    "RequestValidationError",
    "TransportError",
    # Fields
    "ACTION_MAP",
    "FIELD_MAP",
    "POST_FIELDS",
    "REQUIRED_FIELDS",
    "amount_to_minor_units",
    "expiration_to_mmyy",
    "normalize_content",
    # Models
    "PRODUCTION_ENDPOINT",
    "TEST_ENDPOINT",
    "Endpoint",
    "FailureStatus",
    "GatewayInfo",
    "GatewayResponse",
    "Operation",
    "TransactionResult",
    # Response & signing
    "parse_response",
    "compute_shasign",
    "signing_buffer",
    # Storage & transport
    "FieldStore",
    "Transaction",
    "HttpxTransport",
    "TransportClient",
    "TransportResponse",
    # Redaction
    "REDACT_KEYS",
    "mask_card_number",
    "redact_fields",
    "redact_value",
    # Logging
    "configure_logging",
    "JsonFormatter",
    "SENSITIVE_KEYS",
]
