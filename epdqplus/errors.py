"""
epdqplus.errors
~~~~~~~~~~~~~~~
Custom exception hierarchy for the ePDQ+ adapter.

All exceptions inherit from EPDQError so callers can catch the full
family with a single ``except EPDQError`` clause while still being able
to discriminate at finer granularity.

A gateway decline is *not* an exception: it is a completed exchange with
a negative result, reported through :class:`epdqplus.models.TransactionResult`.
"""

from __future__ import annotations


class EPDQError(Exception):
    """Base class for all ePDQ+ adapter exceptions."""


class RequestValidationError(EPDQError):
    """Raised when transaction content cannot be turned into a request.

    Always raised before any network call is made.

    Attributes:
        field: Generic content field that failed validation.
    """

    def __init__(self, message: str, *, field: str = "") -> None:
        super().__init__(message)
        self.field = field


class InvalidAmountFormatError(RequestValidationError):
    """Raised when ``amount`` is not a decimal with exactly two places.

    Attributes:
        value: The offending value, or None when the field was absent.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message, field="amount")
        self.value = value


class InvalidExpirationFormatError(RequestValidationError):
    """Raised when ``expiration`` is not in ``MM/YY`` form.

    Attributes:
        value: The offending value, or None when the field was absent.
    """

    def __init__(self, message: str, *, value: object = None) -> None:
        super().__init__(message, field="expiration")
        self.value = value


class MissingRequiredFieldError(RequestValidationError):
    """Raised when a required content field is absent or empty.

    Attributes:
        field: The first missing field, in required-field order.
        missing: Every missing field, in required-field order.
    """

    def __init__(self, message: str, *, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message, field=missing[0] if missing else "")
        self.missing = missing


class MalformedResponseError(EPDQError):
    """Raised when the gateway response body is not parseable XML.

    Attributes:
        body: The raw response body as received.
    """

    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class TransportError(EPDQError):
    """Raised when the HTTP exchange with the gateway cannot be completed.

    Attributes:
        host: Gateway host the request was sent to.
        status_code: HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        host: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.host = host
        self.status_code = status_code
