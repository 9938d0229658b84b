"""
epdqplus.models
~~~~~~~~~~~~~~~
Pydantic v2 models for the ePDQ+ Direct Link adapter.

All models are immutable (``model_config = ConfigDict(frozen=True)``).
A new :class:`TransactionResult` is produced for every submission rather
than mutating the previous one.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Operation(StrEnum):
    """Three-letter ePDQ operation codes."""

    SALE = "SAL"
    RESERVATION = "RES"
    REFUND = "RFD"


class FailureStatus(StrEnum):
    """Failure classification attached to a declined transaction."""

    DECLINED = "declined"


# ---------------------------------------------------------------------------
# Base configuration
# ---------------------------------------------------------------------------


class _FrozenModel(BaseModel):
    """Shared base: immutable, whitespace-stripped strings."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


class Endpoint(_FrozenModel):
    """Target of a Direct Link POST."""

    host: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    port: int = Field(default=443, ge=1, le=65535)

    @property
    def url(self) -> str:
        netloc = self.host if self.port == 443 else f"{self.host}:{self.port}"
        return f"https://{netloc}{self.path}"


PRODUCTION_ENDPOINT = Endpoint(host="payments.epdq.co.uk", path="/ncol/prod/orderdirect.asp")
TEST_ENDPOINT = Endpoint(host="mdepayments.epdq.co.uk", path="/ncol/test/orderdirect.asp")


# ---------------------------------------------------------------------------
# GatewayResponse
# ---------------------------------------------------------------------------


class GatewayResponse(_FrozenModel):
    """Status fields extracted from an ``orderdirect.asp`` XML reply."""

    status: str | None = Field(default=None, alias="STATUS")
    ncerror: str | None = Field(default=None, alias="NCERROR")
    acceptance: str | None = Field(default=None, alias="ACCEPTANCE")
    payid: str | None = Field(default=None, alias="PAYID")
    ncerrorplus: str | None = Field(default=None, alias="NCERRORPLUS")

    @property
    def is_approved(self) -> bool:
        """True only for ``STATUS`` 9 (payment requested) with ``NCERROR`` 0."""
        return self.status == "9" and self.ncerror == "0"


# ---------------------------------------------------------------------------
# TransactionResult
# ---------------------------------------------------------------------------


class TransactionResult(_FrozenModel):
    """Outcome of one submission, in the host framework's generic terms.

    Example::

        result = TransactionResult(
            is_success=True,
            result_code="1234",
            authorization="98765",
            server_response="<ncresponse STATUS=\\"9\\" .../>",
        )
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    is_success: bool
    result_code: str | None = None
    authorization: str | None = None
    error_message: str | None = None
    failure_status: FailureStatus | None = None
    server_response: str = ""
    status_line: str = ""
    response_headers: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# GatewayInfo
# ---------------------------------------------------------------------------


class GatewayInfo(_FrozenModel):
    """Static description of what this adapter supports."""

    info_compat: str = "0.01"
    gateway_name: str
    gateway_url: str
    module_version: str
    supported_types: list[str] = Field(default_factory=list)
    token_support: bool = False
    test_transaction: bool = False
    supported_actions: list[str] = Field(default_factory=list)
