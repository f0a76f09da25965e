"""Chart command for candlestick CLI.

Fetches candles for a trading pair and prints the rendered chart.
"""

import logging
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from candlestick.chart import DEFAULT_THEME, PLAIN_THEME, render_chart
from candlestick.config import chart_defaults, get_api_key, load_config
from candlestick.errors import CandlestickError
from candlestick.models import ChartOptions

logger = logging.getLogger(__name__)

console = Console()

# Accepted for compatibility; only the trend line is drawn
TECHNICAL_INDICATORS = ["RSI", "SMA", "BB", "EMA", "MACD"]


def _get_client(config: Optional[dict]):
    """Get a price API client."""
    from candlestick.data.cryptocompare import CryptoCompareClient

    return CryptoCompareClient(api_key=get_api_key(config))


def build_options(config: Optional[dict], **overrides) -> ChartOptions:
    """Merge config-file defaults with command-line overrides.

    Overrides set to None fall back to the config file, then to the
    ChartOptions defaults.
    """
    values = chart_defaults(config)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ChartOptions(**values)


def _error(message: str) -> None:
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


@click.command()
@click.option("-c", "--coin", default="BTC", show_default=True, help="Coin symbol, e.g. ETH")
@click.option("--currency", default="USD", show_default=True, help="Trading pair currency")
@click.option("-d", "--days", type=int, help="Number of days the chart will go back")
@click.option("--hours", type=int, help="Number of hours the chart will go back")
@click.option("--mins", type=int, help="Number of minutes the chart will go back")
@click.option("-w", "--width", type=int, help="Chart width in columns (default: 120)")
@click.option("-H", "--height", type=int, help="Chart height in rows (default: 30)")
@click.option("--min", "min_price", type=float, help="Min y-axis value")
@click.option("--max", "max_price", type=float, help="Max y-axis value")
@click.option("--min-range", type=float, help="Min range between min and max y-axis value")
@click.option("--disable-legend", is_flag=True, help="Hide the stats tables")
@click.option("--no-axes", is_flag=True, help="Hide the price and time axes")
@click.option("--no-color", is_flag=True, help="Plain text output")
@click.option("--timezone", help="Timezone for time labels, e.g. UTC")
@click.option(
    "-i", "--indicator",
    "indicators",
    multiple=True,
    type=click.Choice(TECHNICAL_INDICATORS, case_sensitive=False),
    help="Technical indicator (accepted but not drawn)",
)
def chart(
    coin: str,
    currency: str,
    days: Optional[int],
    hours: Optional[int],
    mins: Optional[int],
    width: Optional[int],
    height: Optional[int],
    min_price: Optional[float],
    max_price: Optional[float],
    min_range: Optional[float],
    disable_legend: bool,
    no_axes: bool,
    no_color: bool,
    timezone: Optional[str],
    indicators: tuple[str, ...],
) -> None:
    """Render a candlestick chart for a trading pair.

    \b
    Examples:
      candlestick chart                        # BTC-USD, last 24 hours
      candlestick chart -c ETH --days 30       # Daily candles for 30 days
      candlestick chart --mins 120 -w 80 -H 20 # Small minute chart
    """
    config = load_config()
    coin = coin.upper()
    currency = currency.upper()

    try:
        options = build_options(
            config,
            width=width,
            height=height,
            min_price=min_price,
            max_price=max_price,
            min_range=min_range,
            disable_legend=True if disable_legend else None,
            timezone=timezone,
            pair_label=f"{coin}-{currency}",
            show_axes=False if no_axes else None,
        )
    except ValidationError as e:
        _error(f"Invalid chart options:\n\n{e}")
        raise SystemExit(1)

    if indicators:
        console.print(
            f"[dim]Indicators {', '.join(i.upper() for i in indicators)} "
            "are not drawn; showing the trend line only.[/dim]"
        )

    console.print("[dim]Fetching market data...[/dim]")

    try:
        candles = _get_client(config).fetch_candles(
            coin, currency, days=days, hours=hours, mins=mins,
        )
        output = render_chart(candles, options, PLAIN_THEME if no_color else DEFAULT_THEME)
    except CandlestickError as e:
        _error(str(e))
        raise SystemExit(1)

    logger.debug("Rendered %d candles for %s-%s", len(candles), coin, currency)
    click.echo(output, nl=False)
