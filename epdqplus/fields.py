"""
epdqplus.fields
~~~~~~~~~~~~~~~
Field tables and content normalization for Direct Link requests.

The tables here are the whole of the generic-to-gateway translation:

* :data:`FIELD_MAP` - generic content name to ePDQ parameter name.
* :data:`ACTION_MAP` - lower-cased action name to operation code.
* :data:`POST_FIELDS` - the parameters a request may carry. ``SHASIGN``
  is deliberately absent; it is appended after signing.
* :data:`REQUIRED_FIELDS` - generic names that must be non-empty.

Amounts travel in minor units (``"13.23"`` becomes ``"1323"``) and card
expiry dates as ``MMYY``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any

from epdqplus.errors import (
    InvalidAmountFormatError,
    InvalidExpirationFormatError,
    MissingRequiredFieldError,
)
from epdqplus.models import Operation

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

FIELD_MAP: Mapping[str, str] = MappingProxyType(
    dict(
        (
            ("pspid", "PSPID"),
            ("login", "USERID"),
            ("password", "PSWD"),
            ("shasign", "SHASIGN"),
            ("action", "OPERATION"),
            ("description", "COM"),
            ("name", "CN"),
            ("amount", "AMOUNT"),
            ("currency", "CURRENCY"),
            ("order_number", "ORDERID"),
            ("customer_ip", "REMOTE_ADDR"),
            ("address", "OWNERADDRESS"),
            ("city", "OWNERTOWN"),
            ("zip", "OWNERZIP"),
            ("country", "OWNERCTY"),
            ("ship_last_name", "ECOM_SHIPTO_POSTAL_NAME_LAST"),
            ("ship_first_name", "ECOM_SHIPTO_POSTAL_NAME_FIRST"),
            ("ship_company", "ECOM_SHIPTO_COMPANY"),
            ("ship_address", "ECOM_SHIPTO_POSTAL_STREET_LINE1"),
            ("ship_city", "ECOM_SHIPTO_POSTAL_CITY"),
            ("ship_zip", "ECOM_SHIPTO_POSTAL_POSTCODE"),
            ("ship_country", "ECOM_SHIPTO_POSTAL_COUNTRYCODE"),
            ("phone", "OWNERTELNO"),
            ("email_customer", "EMAIL"),
            ("card_number", "CARDNO"),
            ("expiration", "ED"),
            ("cvv2", "CVC"),
            ("eci", "ECI"),
        )
    )
)

ACTION_MAP: Mapping[str, Operation] = MappingProxyType(
    {
        "normal authorization": Operation.SALE,
        "authorization only": Operation.RESERVATION,
        "credit": Operation.REFUND,
    }
)

POST_FIELDS: frozenset[str] = frozenset(
    {
        "PSPID",
        "USERID",
        "PSWD",
        "OPERATION",
        "COM",
        "CN",
        "AMOUNT",
        "CURRENCY",
        "ORDERID",
        "CARDNO",
        "ED",
        "CVC",
        "ECI",
        "REMOTE_ADDR",
        "OWNERADDRESS",
        "OWNERTOWN",
        "OWNERZIP",
        "OWNERCTY",
        "OWNERTELNO",
        "EMAIL",
        "ECOM_SHIPTO_POSTAL_NAME_LAST",
        "ECOM_SHIPTO_POSTAL_NAME_FIRST",
        "ECOM_SHIPTO_COMPANY",
        "ECOM_SHIPTO_POSTAL_STREET_LINE1",
        "ECOM_SHIPTO_POSTAL_CITY",
        "ECOM_SHIPTO_POSTAL_POSTCODE",
        "ECOM_SHIPTO_POSTAL_COUNTRYCODE",
    }
)

REQUIRED_FIELDS: tuple[str, ...] = (
    "pspid",
    "login",
    "password",
    "action",
    "amount",
    "currency",
    "card_number",
    "expiration",
)

_AMOUNT_RE = re.compile(r"-?\d+\.\d\d", re.ASCII)
_EXPIRATION_RE = re.compile(r"(?P<month>\d\d)/(?P<year>\d\d)", re.ASCII)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def resolve_action(action: Any) -> Any:
    """Return the operation code for *action*, or *action* itself if unknown.

    Unknown values are passed through so callers can send operation codes
    the table does not list yet.
    """
    if not isinstance(action, str):
        return action
    operation = ACTION_MAP.get(action.lower())
    return operation.value if operation is not None else action


def amount_to_minor_units(amount: Any) -> str:
    """Convert ``"49.95"`` to ``"4995"``.

    Raises:
        InvalidAmountFormatError: If *amount* is not ``-?digits.dd``.
    """
    text = amount if isinstance(amount, str) else ""
    if not _AMOUNT_RE.fullmatch(text):
        raise InvalidAmountFormatError(f"Invalid format for amount: {amount!r}", value=amount)
    return str(int(Decimal(text).scaleb(2)))


def expiration_to_mmyy(expiration: Any) -> str:
    """Convert ``"05/15"`` to ``"0515"``.

    Raises:
        InvalidExpirationFormatError: If *expiration* is not ``MM/YY``.
    """
    text = expiration if isinstance(expiration, str) else ""
    match = _EXPIRATION_RE.fullmatch(text)
    if match is None:
        raise InvalidExpirationFormatError(
            f"Invalid expiration date format: {expiration!r}", value=expiration
        )
    return match["month"] + match["year"]


def normalize_content(content: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Rewrite ``action``, ``amount`` and ``expiration`` of *content* in place.

    All other fields are left untouched. Returns *content* for chaining.
    """
    if "action" in content:
        content["action"] = resolve_action(content["action"])
    content["amount"] = amount_to_minor_units(content.get("amount"))
    content["expiration"] = expiration_to_mmyy(content.get("expiration"))
    return content


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def _is_empty(value: Any) -> bool:
    return value is None or str(value) == ""


def check_required(content: Mapping[str, Any]) -> None:
    """Raise :class:`MissingRequiredFieldError` naming the first missing field."""
    missing = tuple(name for name in REQUIRED_FIELDS if _is_empty(content.get(name)))
    if missing:
        raise MissingRequiredFieldError(
            f"Missing required field(s): {', '.join(missing)}", missing=missing
        )


def map_fields(content: Mapping[str, Any]) -> dict[str, str]:
    """Translate generic *content* into whitelisted ePDQ parameters.

    Content keys without a mapping, mappings outside :data:`POST_FIELDS`
    and ``None`` values are dropped silently.
    """
    post_data: dict[str, str] = {}
    for generic, gateway in FIELD_MAP.items():
        if gateway not in POST_FIELDS:
            continue
        value = content.get(generic)
        if value is None:
            continue
        post_data[gateway] = str(value)
    return post_data
