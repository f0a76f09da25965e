"""CLI commands for candlestick.

This package provides the command-line interface: chart rendering and
coin listings.
"""

from candlestick.cli.main import cli, main

__all__ = ["cli", "main"]
