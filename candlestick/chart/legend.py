"""Stats tables shown under the chart."""

from rich import box
from rich.console import Group
from rich.table import Table
from rich.text import Text

from candlestick.chart.theme import DEFAULT_THEME, Theme
from candlestick.models import Stats


def format_price(price: float, include_dollar: bool = True) -> str:
    formatted = f"{price:.2f}"
    return f"${formatted}" if include_dollar else formatted


def format_change(change: float, theme: Theme = DEFAULT_THEME) -> Text:
    """Signed percentage, colored by direction (zero counts as up)."""
    sign = "+" if change >= 0 else ""
    style = theme.up_style if change >= 0 else theme.down_style
    return Text(f"{sign}{change:.2f}%", style=style or "")


def _table(headers: list[str], theme: Theme) -> Table:
    table = Table(
        box=box.SQUARE,
        header_style=theme.table_header_style or "",
        border_style=theme.table_border_style or "",
        show_edge=True,
    )
    for header in headers:
        table.add_column(header, no_wrap=True)
    return table


def _heading(text: str, theme: Theme) -> Text:
    return Text(text, style=theme.title_style or "")


def render_stats(stats: Stats, theme: Theme = DEFAULT_THEME) -> Group:
    """Build the chart stats, change and trades tables.

    Args:
        stats: Stats snapshot to display.
        theme: Styles for headers, borders and signed values.

    Returns:
        A rich renderable group; print it to a console to get text.
    """
    pair = stats.pair or "-"

    stats_table = _table(["pair", "current", "low", "high", "average", "% of average"], theme)
    stats_table.add_row(
        pair,
        format_price(stats.current),
        format_price(stats.min),
        format_price(stats.max),
        format_price(stats.avg),
        format_change(stats.pct_from_avg, theme),
    )

    change_table = _table(["pair"] + [f"{label}:" for label in stats.changes], theme)
    change_table.add_row(
        pair,
        *[format_change(value, theme) for value in stats.changes.values()],
    )

    trades = stats.trades
    side_style = theme.up_style if trades.side == "buy" else theme.down_style
    trades_table = _table(
        ["pair", "last", "side", "size", "coins bought", "coins sold", "buys", "sells"],
        theme,
    )
    trades_table.add_row(
        pair,
        format_price(trades.last),
        Text(trades.side, style=side_style or ""),
        f"{trades.size:.4f}",
        f"{trades.bought:.2f}",
        f"{trades.sold:.2f}",
        Text(str(trades.buys), style=theme.up_style or ""),
        Text(str(trades.sells), style=theme.down_style or ""),
    )

    return Group(
        _heading("Chart stats", theme),
        stats_table,
        Text(""),
        _heading("Change", theme),
        change_table,
        Text(""),
        _heading("Live trades & running totals (approximation)", theme),
        trades_table,
    )
