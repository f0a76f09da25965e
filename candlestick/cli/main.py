"""Main CLI entry point for candlestick.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

import importlib
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

class LazyGroup(click.Group):
    """Group whose subcommands are imported the first time they are looked up.

    ``lazy_subcommands`` maps a command name to the module defining a
    command of the same name.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self.lazy_subcommands:
            command = self._import_command(cmd_name)
            self.add_command(command)
        return command

    def _import_command(self, cmd_name: str) -> click.Command:
        module_path = self.lazy_subcommands[cmd_name]
        command = getattr(importlib.import_module(module_path), cmd_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(f"No command '{cmd_name}' in {module_path}")
        return command


LAZY_SUBCOMMANDS = {
    "chart": "candlestick.cli.chart",
    "coins": "candlestick.cli.coins",
    "top": "candlestick.cli.coins",
    "price": "candlestick.cli.coins",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="candlestick")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """candlestick - view trading charts from your terminal.

    \b
    Quick Start:
      candlestick chart --coin ETH --hours 12   # Chart the last 12 hours
      candlestick coins                         # List available coins
      candlestick top 10                        # Top 10 coins by market cap
      candlestick price BTC-EUR                 # Current price of a pair
    """
    ctx.ensure_object(dict)
    # Log records go to stderr; stdout carries the chart
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
