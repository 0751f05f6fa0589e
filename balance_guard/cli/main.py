"""
CLI interface for Balance Guard.

Provides command-line access to charge, reset and inspect the balance.
"""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from balance_guard.config.loader import (
    BalanceConfig,
    load_balance_config,
    load_cache_config,
    parse_backend,
)
from balance_guard.core.charging import ChargeResult
from balance_guard.sdk.client import BalanceClient
from balance_guard.storage.factory import create_store

app = typer.Typer()
console = Console()

# Exit codes - a declined charge is a failure for scripting purposes
EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1

BACKEND_OPTION = typer.Option(
    "redis",
    "--backend",
    "-b",
    help="Cache server holding the balance: redis or memcached"
)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML file with balance settings"
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """Balance Guard CLI."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("balance_guard").setLevel(level)
    if ctx.invoked_subcommand is None:
        console.print("Balance Guard - Use --help to see available commands")


def _build_client(backend: str, config_path: Optional[str]) -> BalanceClient:
    """Build a client from CLI options and the environment."""
    cache_backend = parse_backend(backend)
    balance_config = load_balance_config(config_path)
    store = create_store(load_cache_config(cache_backend), balance_config)
    return BalanceClient(cache_backend, config=balance_config, store=store)


@app.command()
def charge(
    backend: str = BACKEND_OPTION,
    config: Optional[str] = CONFIG_OPTION
):
    """Charge one request against the balance."""
    try:
        client = _build_client(backend, config)
        result = client.charge()
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    _display_charge_result(result)
    sys.exit(EXIT_CODE_OK if result.is_authorized else EXIT_CODE_FAIL)


@app.command()
def reset(
    backend: str = BACKEND_OPTION,
    config: Optional[str] = CONFIG_OPTION
):
    """Reset the balance to its default value."""
    try:
        client = _build_client(backend, config)
        new_balance = client.reset()
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    console.print(f"[green]✓[/] Balance reset to {new_balance}")
    sys.exit(EXIT_CODE_OK)


@app.command()
def balance(
    backend: str = BACKEND_OPTION,
    config: Optional[str] = CONFIG_OPTION
):
    """Show the current balance."""
    try:
        client = _build_client(backend, config)
        current = client.balance()
    except Exception as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    _display_balance(client.config, current)
    sys.exit(EXIT_CODE_OK)


def _display_charge_result(result: ChargeResult):
    if result.is_authorized:
        console.print(f"[green]✓[/] Authorized: charged {result.charges}")
    else:
        console.print("[bold yellow]Declined:[/] insufficient balance")
    console.print(f"Remaining balance: {result.remaining_balance}")


def _display_balance(config: BalanceConfig, current: int):
    console.print(f"[bold]Key:[/bold] {config.key}")
    console.print(f"Balance: {current} / {config.default_balance}")
    console.print(f"Charge per request: {config.charges}")


if __name__ == "__main__":
    app()
