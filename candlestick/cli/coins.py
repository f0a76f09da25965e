"""Coin listing commands for candlestick CLI."""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from candlestick.config import get_api_key, load_config
from candlestick.errors import MarketDataError

console = Console()


def _get_client(config: Optional[dict]):
    """Get a price API client."""
    from candlestick.data.cryptocompare import CryptoCompareClient

    return CryptoCompareClient(api_key=get_api_key(config))


def _error(message: str) -> None:
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def _format_change(change: float) -> str:
    color = "green" if change >= 0 else "red"
    arrow = "↑" if change >= 0 else "↓"
    return f"[{color}]{arrow} {abs(change):.2f}%[/{color}]"


@click.command()
def coins() -> None:
    """List all available coins."""
    console.print("[dim]Fetching available coins...[/dim]")

    try:
        listed = _get_client(load_config()).list_coins()
    except MarketDataError as e:
        _error(str(e))
        raise SystemExit(1)

    console.print("[bold]Available coins:[/bold]")
    for coin in listed:
        console.print(f"{coin.symbol.upper()} - {coin.name}", markup=False, highlight=False)


@click.command()
@click.argument("limit", type=click.IntRange(min=1), default=10)
def top(limit: int) -> None:
    """List the top LIMIT coins by market cap (default: 10)."""
    console.print("[dim]Fetching top coins...[/dim]")

    try:
        ranked = _get_client(load_config()).get_top_coins(limit)
    except MarketDataError as e:
        _error(str(e))
        raise SystemExit(1)

    table = Table(
        title=f"Top {limit} coins by market cap",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Name")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Market Cap", justify="right")
    table.add_column("24h", justify="right")

    for rank, coin in enumerate(ranked, start=1):
        table.add_row(
            str(rank),
            coin.symbol.upper(),
            coin.name,
            f"${coin.current_price:,.2f}",
            f"${coin.market_cap:,.0f}",
            _format_change(coin.change_24h),
        )

    console.print(table)


@click.command()
@click.argument("pair")
def price(pair: str) -> None:
    """Show the current price of PAIR, e.g. BTC-USD."""
    coin, _, currency = pair.upper().partition("-")
    if not coin or not currency:
        _error(f"Invalid pair '{pair}'. Use the COIN-CURRENCY form, e.g. BTC-USD.")
        raise SystemExit(1)

    try:
        current = _get_client(load_config()).fetch_current_price(coin, currency)
    except MarketDataError as e:
        _error(str(e))
        raise SystemExit(1)

    console.print(f"[bold]{escape(coin)}-{escape(currency)}[/bold] [green]{current:,.2f}[/green]")
