"""
epdqplus.redaction
~~~~~~~~~~~~~~~~~~
Scrubbing of card data and credentials before logging.

Design principles
-----------------
* **Deny by name** - :data:`REDACT_KEYS` lists both the generic and the
  ePDQ spelling of every credential field; matching is case-insensitive.
* **Card numbers keep their last four digits** so support staff can still
  correlate a log line with a customer's card.
* **Non-destructive** - functions return new dicts; originals are never
  mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# ---------------------------------------------------------------------------
# Sensitive key registry
# ---------------------------------------------------------------------------

REDACT_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "pswd",
        "shasign",
        "secret",
        "cvv2",
        "cvc",
        "authorization",
    }
)

CARD_KEYS: frozenset[str] = frozenset({"card_number", "cardno"})

_REDACTED_SENTINEL = "[REDACTED]"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def mask_card_number(value: Any) -> str:
    """Return *value* with every digit but the last four replaced by ``*``.

    Example::

        >>> mask_card_number("5569510117486571")
        '************6571'
    """
    text = str(value)
    if len(text) <= 4:
        return "*" * len(text)
    return "*" * (len(text) - 4) + text[-4:]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def redact_value(key: str, value: Any, denylist: frozenset[str] = REDACT_KEYS) -> Any:
    """Return the loggable form of *value* stored under *key*.

    Keys are matched case-insensitively against *denylist* and
    :data:`CARD_KEYS`; anything else is returned unchanged.
    """
    lowered = key.lower()
    if lowered in denylist:
        return _REDACTED_SENTINEL
    if lowered in CARD_KEYS and value is not None:
        return mask_card_number(value)
    return value


def redact_fields(
    fields: Mapping[str, Any],
    denylist: frozenset[str] | None = None,
) -> dict[str, Any]:
    """Return a copy of *fields* that is safe to log.

    Works on both generic content and ePDQ post data.

    Args:
        fields: Field names to values.
        denylist: Additional keys to redact beyond :data:`REDACT_KEYS`.

    Example::

        >>> redact_fields({"CARDNO": "5569510117486571", "PSWD": "x", "AMOUNT": "4995"})
        {'CARDNO': '************6571', 'PSWD': '[REDACTED]', 'AMOUNT': '4995'}
    """
    effective_denylist = REDACT_KEYS if denylist is None else REDACT_KEYS | denylist
    return {key: redact_value(key, value, effective_denylist) for key, value in fields.items()}
