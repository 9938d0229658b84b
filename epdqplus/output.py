"""
epdqplus.output
~~~~~~~~~~~~~~~
Output formatting for the CLI: JSON or rich tables.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from epdqplus.models import GatewayInfo, TransactionResult

console = Console()


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def print_result(result: TransactionResult, json_output: bool = False) -> None:
    """Print the outcome of a submission."""
    if json_output:
        print_json(result.model_dump(mode="json"))
        return

    table = Table(title="Transaction Result")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green" if result.is_success else "red")

    table.add_row("is_success", str(result.is_success))
    table.add_row("authorization", result.authorization or "")
    table.add_row("result_code", result.result_code or "")
    table.add_row("error_message", result.error_message or "")
    table.add_row("failure_status", result.failure_status or "")
    table.add_row("status_line", result.status_line)

    console.print(table)

    if result.server_response:
        console.print("\n[bold]Server response:[/bold]")
        console.print(result.server_response, markup=False, highlight=False)


def print_info(info: GatewayInfo, json_output: bool = False) -> None:
    """Print the adapter's capability description."""
    if json_output:
        print_json(info.model_dump(mode="json"))
        return

    table = Table(title=info.gateway_name)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Module version", info.module_version)
    table.add_row("Gateway URL", info.gateway_url)
    table.add_row("Supported types", ", ".join(info.supported_types))
    table.add_row("Supported actions", ", ".join(info.supported_actions))
    table.add_row("Token support", str(info.token_support))
    table.add_row("Test transactions", str(info.test_transaction))

    console.print(table)
