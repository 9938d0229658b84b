"""
epdqplus.transaction
~~~~~~~~~~~~~~~~~~~~
Field storage for a single transaction.

:class:`FieldStore` is the contract the gateway depends on: it hands out
the generic content and records the outcome.  :class:`Transaction` is the
in-memory implementation callers normally use.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from epdqplus.models import FailureStatus, TransactionResult


@runtime_checkable
class FieldStore(Protocol):
    """Structural interface for transaction content and result storage."""

    def content(self) -> dict[str, Any]:
        """Return a copy of the generic content fields."""
        ...

    def record_result(self, result: TransactionResult) -> None:
        """Store the outcome of a submission, replacing any previous one."""
        ...


class Transaction:
    """A payment request and, once submitted, its result.

    Example::

        tx = Transaction(
            pspid="MYSHOP",
            login="apiuser",
            password="secret",
            action="Normal Authorization",
            amount="49.95",
            currency="USD",
            card_number="5569510117486571",
            expiration="05/15",
        )
        gateway.submit(tx)
        if tx.is_success:
            print(tx.authorization)
    """

    def __init__(self, **content: Any) -> None:
        self._content: dict[str, Any] = dict(content)
        self._result: TransactionResult | None = None

    def __repr__(self) -> str:
        state = "unsubmitted" if self._result is None else f"is_success={self._result.is_success}"
        return f"<Transaction {state}>"

    # -- FieldStore ---------------------------------------------------------

    def content(self) -> dict[str, Any]:
        return dict(self._content)

    def update_content(self, fields: Mapping[str, Any]) -> None:
        self._content = dict(fields)

    def record_result(self, result: TransactionResult) -> None:
        self._result = result

    # -- Result surface -----------------------------------------------------

    @property
    def result(self) -> TransactionResult | None:
        return self._result

    @property
    def submitted(self) -> bool:
        return self._result is not None

    @property
    def is_success(self) -> bool | None:
        return self._result.is_success if self._result else None

    @property
    def authorization(self) -> str | None:
        return self._result.authorization if self._result else None

    @property
    def result_code(self) -> str | None:
        return self._result.result_code if self._result else None

    @property
    def error_message(self) -> str | None:
        return self._result.error_message if self._result else None

    @property
    def failure_status(self) -> FailureStatus | None:
        return self._result.failure_status if self._result else None

    @property
    def server_response(self) -> str | None:
        return self._result.server_response if self._result else None

    @property
    def response_headers(self) -> dict[str, str] | None:
        return self._result.response_headers if self._result else None
