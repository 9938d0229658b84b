"""
epdqplus.transport
~~~~~~~~~~~~~~~~~~
HTTP transport contract and the default httpx implementation.

The gateway never talks to the network directly; it hands the endpoint
and form fields to a :class:`TransportClient`.  Any object with a
matching ``post`` method satisfies the protocol, which keeps tests free of
network access.

:class:`HttpxTransport` is synchronous: a submission is a single blocking
request/response exchange.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol, runtime_checkable

import httpx

from epdqplus.errors import TransportError
from epdqplus.models import Endpoint

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class TransportResponse:
    """Raw reply handed back to the gateway."""

    body: str
    status_line: str = ""
    headers: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class TransportClient(Protocol):
    """Structural interface for posting URL-form-encoded fields."""

    def post(self, endpoint: Endpoint, fields: Mapping[str, str]) -> TransportResponse:
        """POST *fields* to *endpoint* and return the raw reply.

        Raises:
            TransportError: If no response could be obtained.
        """
        ...


class HttpxTransport:
    """:class:`TransportClient` backed by a blocking :class:`httpx.Client`.

    HTTP status codes are not interpreted here; the body is returned as
    text whatever the status and the gateway decides what it means.

    Usage::

        with HttpxTransport(timeout=15.0) as transport:
            gateway = EPDQPlusGateway(transport)
            gateway.submit(tx)
    """

    def __init__(
        self,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def post(self, endpoint: Endpoint, fields: Mapping[str, str]) -> TransportResponse:
        try:
            resp = self._client.post(endpoint.url, data=dict(fields))
        except httpx.HTTPError as exc:
            logger.warning(
                "Gateway request failed",
                extra={"host": endpoint.host, "path": endpoint.path, "error": str(exc)},
            )
            raise TransportError(
                f"POST to {endpoint.host} failed: {exc}", host=endpoint.host
            ) from exc

        logger.debug(
            "Gateway response received",
            extra={
                "host": endpoint.host,
                "status_code": resp.status_code,
                "response_size": len(resp.content),
            },
        )

        return TransportResponse(
            body=resp.text,
            status_line=f"{resp.http_version} {resp.status_code} {resp.reason_phrase}",
            headers=dict(resp.headers.items()),
        )
