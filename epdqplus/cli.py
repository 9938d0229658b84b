"""
epdqplus.cli
~~~~~~~~~~~~
Typer application entry point for the ``epdqplus`` CLI.

Usage::

    epdqplus info
    epdqplus --test submit --amount 49.95 --currency USD \\
        --card-number 5569510117486571 --expiration 05/15 --cvv2 377 \\
        --field order_number=ORDER0001 --field name="B Obama"

Credentials not passed on the command line are read from the
environment (or ``.env``)::

    EPDQ_PSPID, EPDQ_LOGIN, EPDQ_PASSWORD, EPDQ_SHASIGN, EPDQ_TEST_MODE

Pass ``--live`` to reach the production server even when
``EPDQ_TEST_MODE`` is set.

Exit codes: 0 approved, 2 declined, 1 on any error.
"""

from __future__ import annotations

from typing import Annotated

import typer

from epdqplus.config import settings
from epdqplus.errors import EPDQError
from epdqplus.gateway import EPDQPlusGateway
from epdqplus.logging import configure_logging
from epdqplus.transaction import Transaction
from epdqplus.transport import HttpxTransport

app = typer.Typer(
    name="epdqplus",
    help="Barclaycard ePDQ+ Direct Link command line client.",
    no_args_is_help=True,
)

# ---------------------------------------------------------------------------
# Global state (populated by the callback)
# ---------------------------------------------------------------------------

_gateway: EPDQPlusGateway | None = None
_json_output: bool = False


def get_gateway() -> EPDQPlusGateway:
    """Return the global gateway instance."""
    if _gateway is None:
        raise typer.Exit(code=1)
    return _gateway


def is_json() -> bool:
    """Return True if --json output was requested."""
    return _json_output


def _parse_fields(pairs: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            typer.echo(f"Error: --field expects key=value, got {pair!r}", err=True)
            raise typer.Exit(code=1)
        fields[key.strip()] = value
    return fields


@app.callback()
def main(
    test: Annotated[
        bool | None,
        typer.Option("--test/--live", help="Use the ePDQ test or live server [default: EPDQ_TEST_MODE]"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Emit JSON debug logs")] = False,
) -> None:
    """Configure global options for all commands."""
    global _gateway, _json_output  # noqa: PLW0603
    _json_output = json_output
    if verbose:
        configure_logging(level="DEBUG", service_name=settings.SERVICE_NAME)
    _gateway = EPDQPlusGateway(
        HttpxTransport(timeout=settings.HTTP_TIMEOUT),
        test=settings.EPDQ_TEST_MODE if test is None else test,
    )


# ---------------------------------------------------------------------------
# submit
# ---------------------------------------------------------------------------


@app.command()
def submit(
    amount: Annotated[str, typer.Option(help="Amount with two decimals, e.g. 49.95")],
    currency: Annotated[str, typer.Option(help="ISO currency code")],
    card_number: Annotated[str, typer.Option("--card-number", help="Card number")],
    expiration: Annotated[str, typer.Option(help="Card expiry as MM/YY")],
    action: Annotated[str, typer.Option(help="Transaction action")] = "Normal Authorization",
    cvv2: Annotated[str | None, typer.Option(help="Card security code")] = None,
    pspid: Annotated[str | None, typer.Option(help="Merchant PSPID")] = None,
    login: Annotated[str | None, typer.Option(help="API user")] = None,
    password: Annotated[str | None, typer.Option(help="API user password")] = None,
    shasign: Annotated[str | None, typer.Option(help="SHA-IN pass phrase")] = None,
    field: Annotated[
        list[str] | None, typer.Option("--field", "-f", help="Extra content field as key=value")
    ] = None,
) -> None:
    """Submit a normal authorization."""
    from epdqplus.output import print_result

    content: dict[str, str] = dict(settings.credentials())
    content.update(_parse_fields(field or []))
    overrides = {
        "pspid": pspid,
        "login": login,
        "password": password,
        "shasign": shasign,
        "cvv2": cvv2,
    }
    content.update({k: v for k, v in overrides.items() if v is not None})
    content.update(
        action=action,
        amount=amount,
        currency=currency,
        card_number=card_number,
        expiration=expiration,
    )

    gateway = get_gateway()
    try:
        result = gateway.submit(Transaction(**content))
    except EPDQError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    print_result(result, json_output=is_json())
    if not result.is_success:
        raise typer.Exit(code=2)


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------


@app.command()
def info() -> None:
    """Show what this adapter supports and which server it targets."""
    from epdqplus.output import print_info

    gateway = get_gateway()
    print_info(gateway.info(), json_output=is_json())
    if not is_json():
        typer.echo(f"Endpoint: {gateway.endpoint.url}")


if __name__ == "__main__":
    app()
